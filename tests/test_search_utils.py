from papersnap.domain.value_objects import DocStatus, DocType
from papersnap.utils.document_utils import compute_dashboard_stats, created_timestamp, format_amount, normalize_folder_id
from papersnap.utils.search_utils import filter_documents, sort_documents

from conftest import make_record


def ids(docs):
    return [doc.id for doc in docs]


DOCS = [
    make_record("A", vendor="Shell", summary="Fuel", amount=150.0, category="Fuel", date="2024-03-15"),
    make_record("B", vendor="IKEA", summary="Office chair", amount=89.99, category="Office", date="2024-02-01"),
    make_record("C", vendor="Lufthansa", summary="Flight to Berlin", amount=420.0, category="Travel", date="2024-04-20"),
]


def test_search_is_case_insensitive_on_vendor_and_summary():
    assert ids(filter_documents(DOCS, search="ikea")) == ["B"]
    assert ids(filter_documents(DOCS, search="BERLIN")) == ["C"]


def test_search_matches_amount_text():
    assert ids(filter_documents(DOCS, search="89.9")) == ["B"]
    assert ids(filter_documents(DOCS, search="420")) == ["C"]


def test_category_all_means_no_filter():
    assert ids(filter_documents(DOCS, category="All")) == ["A", "B", "C"]
    assert ids(filter_documents(DOCS, category="Travel")) == ["C"]


def test_date_range_is_inclusive():
    assert ids(filter_documents(DOCS, date_from="2024-03-15", date_to="2024-04-20")) == ["A", "C"]
    assert ids(filter_documents(DOCS, date_to="2024-02-01")) == ["B"]


def test_sort_by_date_then_created_at_descending():
    docs = DOCS + [make_record("D", date="2024-03-15", created_at="2024-03-16T09:00:00+00:00")]
    assert ids(sort_documents(docs)) == ["C", "D", "A", "B"]


def test_format_amount():
    assert format_amount(150.0) == "150"
    assert format_amount(12.5) == "12.5"
    assert format_amount(0) == "0"


def test_normalize_folder_id():
    assert normalize_folder_id(None) is None
    assert normalize_folder_id("") is None
    assert normalize_folder_id("  ") is None
    assert normalize_folder_id("f1") == "f1"


def test_dashboard_stats():
    docs = [
        make_record("A", file_data="x" * (1024 * 1024), created_at="2024-01-01T00:00:00+00:00"),
        make_record("B", kind=DocType.INVOICE, status=DocStatus.ERROR, file_data="", created_at="2024-01-03T00:00:00+00:00"),
        make_record("C", file_data="x" * (512 * 1024), created_at="2024-01-02T00:00:00+00:00"),
    ]

    stats = compute_dashboard_stats(docs)

    assert stats["total_docs"] == 3
    assert stats["ready_to_export"] == 2
    assert stats["storage_used_mb"] == 1.5
    assert {"name": "RECEIPT", "value": 2} in stats["type_distribution"]
    assert {"name": "INVOICE", "value": 1} in stats["type_distribution"]
    assert ids(stats["recent_documents"]) == ["B", "C", "A"]


def test_dashboard_recent_is_limited_to_five():
    docs = [make_record(str(i), created_at=f"2024-01-0{i}T00:00:00+00:00") for i in range(1, 8)]
    assert ids(compute_dashboard_stats(docs)["recent_documents"]) == ["7", "6", "5", "4", "3"]


def test_sort_ties_compare_created_at_as_instants():
    imported = make_record("OLD", date="2024-03-15", created_at="2024-03-15T10:00:00Z")
    uploaded = make_record("NEW", date="2024-03-15", created_at="2024-03-15T10:00:00.500000+00:00")

    assert ids(sort_documents([imported, uploaded])) == ["NEW", "OLD"]
    assert ids(sort_documents([uploaded, imported])) == ["NEW", "OLD"]


def test_dashboard_recent_orders_mixed_timestamp_formats():
    docs = [
        make_record("A", created_at="2024-01-02T09:00:00Z"),
        make_record("B", created_at="2024-01-02T10:30:00+02:00"),
        make_record("C", created_at="2024-01-02T08:59:59.999000+00:00"),
    ]
    assert ids(compute_dashboard_stats(docs)["recent_documents"]) == ["A", "C", "B"]


def test_created_timestamp_handles_naive_and_garbage_values():
    naive = created_timestamp(make_record("A", created_at="2024-01-02T09:00:00"))
    zulu = created_timestamp(make_record("B", created_at="2024-01-02T09:00:00Z"))

    assert naive == zulu
    assert created_timestamp(make_record("C", created_at="not a date")) < zulu
