"""Name, ARN and URL derivation for generated resources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from deploy_hooks.config.defaults import (
    FIFO_SUFFIX,
    SERVICE_NAME,
    SNS_BASE_ARN,
    SQS_BASE_ARN,
    SQS_BASE_URL,
)

# Runs of Unicode letters and digits; separators are everything else.
_RUN_PATTERN = re.compile(r"[^\W_]+")


def _char_kind(char: str) -> str:
    if char.isdigit():
        return "digit"
    # caseless scripts group with lowercase
    return "upper" if char.isupper() else "lower"


def _split_run(run: str) -> List[str]:
    words: List[str] = []
    start = 0
    for index in range(1, len(run)):
        prev_kind, kind = _char_kind(run[index - 1]), _char_kind(run[index])
        next_kind = _char_kind(run[index + 1]) if index + 1 < len(run) else None
        if (
            (prev_kind == "digit") != (kind == "digit")
            or (prev_kind == "lower" and kind == "upper")
            # last capital of an acronym starts the next word: XMLHttp -> XML Http
            or (prev_kind == "upper" and kind == "upper" and next_kind == "lower")
        ):
            words.append(run[start:index])
            start = index
    words.append(run[start:])
    return words


def split_words(text: str) -> List[str]:
    """Split camelCase, kebab-case, snake_case or spaced text into words.

    Letters of any script are kept, so ``ñandu`` and ``andu`` stay distinct.
    """
    return [word for run in _RUN_PATTERN.findall(str(text or "")) for word in _split_run(run)]


def upper_camel_case(text: str) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in split_words(text))


def upper_snake_case(text: str) -> str:
    return "_".join(word.upper() for word in split_words(text))


def start_case(text: str) -> str:
    """Upper-first every word and join with spaces, keeping the rest of each word."""
    return " ".join(word[:1].upper() + word[1:] for word in split_words(text))


@dataclass(frozen=True)
class EntityNames:
    title_name: str
    filename: str
    env_var_name: str
    main_queue: str
    delay_queue: str
    dlq: str
    main_queue_policy: str


@dataclass(frozen=True)
class ResourceArns:
    main_queue: str
    delay_queue: str
    dlq: str


def generate_names(name: str) -> EntityNames:
    """Derive every resource name of a queue group from its entity name."""
    title_name = upper_camel_case(name)
    return EntityNames(
        title_name=title_name,
        filename=kebab_case(name),
        env_var_name=upper_snake_case(name),
        main_queue=f"{title_name}Queue",
        delay_queue=f"{title_name}DelayQueue",
        dlq=f"{title_name}DLQ",
        main_queue_policy=f"{title_name}QueuePolicy",
    )


def fix_fifo_name(name: str, fifo: bool) -> str:
    return f"{name}{FIFO_SUFFIX}" if fifo else name


def queue_physical_name(queue_name: str, fifo: bool) -> str:
    """Return the deployed queue name, prefixed with the service name token."""
    return f"{SERVICE_NAME}{fix_fifo_name(queue_name, fifo)}"


def queue_arn(queue_name: str, fifo: bool) -> str:
    return f"{SQS_BASE_ARN}:{queue_physical_name(queue_name, fifo)}"


def queue_url(queue_name: str, fifo: bool) -> str:
    return f"{SQS_BASE_URL}{queue_physical_name(queue_name, fifo)}"


def generate_arns(names: EntityNames, fifo: bool) -> ResourceArns:
    return ResourceArns(
        main_queue=queue_arn(names.main_queue, fifo),
        delay_queue=queue_arn(names.delay_queue, fifo),
        dlq=queue_arn(names.dlq, fifo),
    )


def topic_arn(topic_name: str) -> str:
    """Return the ARN of an SNS topic deployed under its plain name."""
    return f"{SNS_BASE_ARN}:{topic_name}"
