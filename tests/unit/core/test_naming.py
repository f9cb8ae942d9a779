import pytest

from deploy_hooks.core.naming import (
    EntityNames,
    fix_fifo_name,
    generate_arns,
    generate_names,
    kebab_case,
    queue_url,
    split_words,
    start_case,
    topic_arn,
    upper_camel_case,
    upper_snake_case,
)
from tests.fixtures.hook_builders import expected_queue_arn, expected_queue_url, expected_topic_arn


@pytest.mark.parametrize("raw", ["order-item", "order_item", "orderItem", "OrderItem", "order item"])
def test_case_conversions_agree_across_input_styles(raw: str) -> None:
    """
    Given: 같은 단어를 다양한 표기법으로 작성한 이름
    When: 케이스 변환
    Then: 모든 표기법이 동일한 결과로 수렴
    """
    assert upper_camel_case(raw) == "OrderItem"
    assert kebab_case(raw) == "order-item"
    assert upper_snake_case(raw) == "ORDER_ITEM"


def test_split_words_handles_acronyms_and_digits() -> None:
    assert split_words("sessionDLQ") == ["session", "DLQ"]
    assert split_words("XMLHttpRequest") == ["XML", "Http", "Request"]
    assert split_words("order2") == ["order", "2"]
    assert kebab_case("sessionDLQ") == "session-dlq"


def test_start_case_keeps_inner_capitals() -> None:
    assert start_case("product-image") == "Product Image"
    assert start_case("productImage") == "Product Image"
    assert start_case("SKU") == "SKU"


def test_generate_names_for_entity() -> None:
    """
    Given: 엔티티 이름 'order-item'
    When: 이름 생성
    Then: 타이틀/파일명/환경변수명/큐 이름이 일관되게 파생
    """
    assert generate_names("order-item") == EntityNames(
        title_name="OrderItem",
        filename="order-item",
        env_var_name="ORDER_ITEM",
        main_queue="OrderItemQueue",
        delay_queue="OrderItemDelayQueue",
        dlq="OrderItemDLQ",
        main_queue_policy="OrderItemQueuePolicy",
    )


def test_fix_fifo_name() -> None:
    assert fix_fifo_name("OrderQueue", True) == "OrderQueue.fifo"
    assert fix_fifo_name("OrderQueue", False) == "OrderQueue"


def test_generate_arns_applies_fifo_suffix_to_every_queue() -> None:
    """
    Given: FIFO 플래그가 켜진 이름 집합
    When: ARN 생성
    Then: 메인/지연/DLQ 모두 .fifo 접미사
    """
    arns = generate_arns(generate_names("order"), True)

    assert arns.main_queue == expected_queue_arn("OrderQueue.fifo")
    assert arns.delay_queue == expected_queue_arn("OrderDelayQueue.fifo")
    assert arns.dlq == expected_queue_arn("OrderDLQ.fifo")


def test_standard_queue_arns_have_no_suffix() -> None:
    arns = generate_arns(generate_names("order"), False)
    assert arns.dlq == expected_queue_arn("OrderDLQ")


def test_queue_url_and_topic_arn() -> None:
    assert queue_url("OrderQueue", False) == expected_queue_url("OrderQueue")
    assert topic_arn("OrderCreated") == expected_topic_arn("OrderCreated")


def test_non_ascii_letters_are_kept() -> None:
    """
    Given: 라틴 확장 문자 또는 한자로 된 이름
    When: 케이스 변환
    Then: 문자가 누락되지 않아 서로 다른 이름이 충돌하지 않음
    """
    assert upper_camel_case("ñandu") == "Ñandu"
    assert upper_camel_case("ñandu") != upper_camel_case("andu")
    assert kebab_case("ÜberOrder") == "über-order"
    assert split_words("日本Order") == ["日本", "Order"]
    assert generate_names("주문").main_queue == "주문Queue"


def test_split_words_ignores_separator_only_text() -> None:
    assert split_words("--__  ") == []
