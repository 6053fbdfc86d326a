import pytest

from src.models import ProductRecord, SessionState, TerminationReason
from src.services import ResultAggregator


def _batch(prefix: str, count: int) -> list[ProductRecord]:
    return [
        ProductRecord(asin=f"{prefix}{index}", title=f"Item {index}")
        for index in range(count)
    ]


def test_tag_batch_assigns_page_and_one_based_positions():
    tagged = ResultAggregator().tag_batch(_batch("A", 3), page_number=2)

    assert [(r.page, r.index_on_page) for r in tagged] == [(2, 1), (2, 2), (2, 3)]
    assert [r.asin for r in tagged] == ["A0", "A1", "A2"]


def test_tag_batch_does_not_mutate_input_records():
    batch = _batch("A", 2)

    ResultAggregator().tag_batch(batch, page_number=1)

    assert all(r.page is None and r.index_on_page is None for r in batch)


def test_finalize_enumerates_records_in_collected_order():
    aggregator = ResultAggregator()
    state = SessionState()
    state.append_batch(aggregator.tag_batch(_batch("A", 20), 1))
    state.append_batch(aggregator.tag_batch(_batch("B", 18), 2))
    state.terminate(TerminationReason.EMPTY_PAGE, has_more_pages=False)

    result = aggregator.finalize(state, "laptop")

    assert [r.global_index for r in result.records] == list(range(1, 39))
    keys = [(r.page, r.index_on_page) for r in result.records]
    assert keys == sorted(keys)
    assert result.summary.total_records == 38
    assert result.summary.pages_visited == 2
    assert result.summary.search_query == "laptop"
    assert result.summary.termination_reason is TerminationReason.EMPTY_PAGE


def test_finalize_leaves_session_records_untouched():
    aggregator = ResultAggregator()
    state = SessionState()
    state.append_batch(aggregator.tag_batch(_batch("A", 2), 1))

    aggregator.finalize(state, "laptop")

    assert all(r.global_index is None for r in state.collected)


def test_pages_visited_comes_from_records_not_budget():
    aggregator = ResultAggregator()
    state = SessionState(current_page=3)
    state.append_batch(aggregator.tag_batch(_batch("A", 1), 1))

    result = aggregator.finalize(state, "laptop")

    assert result.summary.pages_visited == 1


def test_finalize_of_empty_session():
    result = ResultAggregator().finalize(SessionState(), "laptop")

    assert result.records == []
    assert result.summary.total_records == 0
    assert result.summary.pages_visited == 0


def test_session_state_rejects_out_of_order_batch():
    aggregator = ResultAggregator()
    state = SessionState()
    state.append_batch(aggregator.tag_batch(_batch("A", 2), 2))

    with pytest.raises(ValueError):
        state.append_batch(aggregator.tag_batch(_batch("B", 2), 1))

    assert len(state.collected) == 2


def test_session_state_rejects_untagged_records():
    state = SessionState()

    with pytest.raises(ValueError):
        state.append_batch(_batch("A", 1))

    assert state.collected == []


def test_record_to_dict_has_every_field():
    record = ProductRecord(asin="B1", title="T").with_position(1, 1)

    assert set(record.to_dict()) == {
        "asin",
        "title",
        "price",
        "currency_symbol",
        "rating",
        "review_count",
        "url",
        "page",
        "index_on_page",
        "global_index",
    }
