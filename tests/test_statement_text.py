import time

from statement_import.ingest.statement_text import (
    clean_description,
    flatten_pages,
    iter_raw_records,
)
from statement_import.models import RawRecord

from tests.helpers.statements import SAMPLE_PAGES


def test_flatten_pages_collapses_whitespace_across_pages():
    text = flatten_pages(["  Header\n\nrow one\t 05.01.24 ", "", "row two\n"])
    assert text == "Header row one 05.01.24 row two"


def test_sample_statement_yields_rows_in_order_without_summary_lines():
    records = list(iter_raw_records(flatten_pages(SAMPLE_PAGES)))

    assert records == [
        RawRecord("MAGNUM CAFE #12", "05.01.24", "- 1 500,00"),
        RawRecord("Пополнение с карты", "06.01.24", "+ 2 000,00"),
        RawRecord("Yandex Go", "07.01.24", "−850,00"),
        RawRecord("Perevod Aigerim", "08.01.24", "- 5 000,00"),
        RawRecord("KFC Almaty", "09.01.24", "- 3 200,00"),
        RawRecord("KFC Almaty", "09.01.24", "- 3 200,00"),
    ]


def test_balance_and_total_rows_are_skipped():
    text = "Остаток на 01.01.24 10 000,00 ₸ Всего расходов 31.01.24 - 500,00 ₸"
    assert list(iter_raw_records(text)) == []


def test_leaked_balance_figure_is_cut_from_description():
    # The capture runs from the previous row's marker; a running balance
    # printed in between must not end up in the merchant text.
    text = "Doner House 03.02.24 - 900,00 ₸ 12 100,00 ₸ APTEKA 24 04.02.24 - 2 450,50 ₸"
    records = list(iter_raw_records(text))

    assert [r.description_text for r in records] == ["Doner House", "APTEKA 24"]
    assert records[1].amount_text == "- 2 450,50"


def test_letter_t_is_accepted_as_currency_marker():
    records = list(iter_raw_records("Onay 11.03.24 - 120,00 T"))
    assert records == [RawRecord("Onay", "11.03.24", "- 120,00")]


def test_text_in_another_layout_yields_nothing():
    text = "2024-01-05 MAGNUM -1500.00 KZT 2024-01-06 Salary +250000.00 KZT"
    assert list(iter_raw_records(text)) == []


def test_iter_raw_records_is_lazy_single_pass():
    gen = iter_raw_records(flatten_pages(SAMPLE_PAGES))
    first = next(gen)
    assert first.description_text == "MAGNUM CAFE #12"
    assert len(list(gen)) == 5
    assert list(gen) == []


def test_clean_description_keeps_text_after_last_marker():
    assert clean_description(" 100,00 ₸ 200,00 ₸  Small Shop ") == "Small Shop"
    assert clean_description("  Plain merchant ") == "Plain merchant"
    assert clean_description("5 000,00 ₸") == ""


def test_long_text_in_another_layout_is_scanned_in_linear_time():
    text = "2024-01-05 MAGNUM -1500.00 KZT " * 8_000

    started = time.perf_counter()
    assert list(iter_raw_records(text)) == []
    assert time.perf_counter() - started < 2.0


def test_long_footer_after_last_row_does_not_stall():
    footer = "Комиссия банка за обслуживание счета 0 KZT " * 5_000
    text = "Yandex Go 07.01.24 −850,00 ₸ " + footer

    started = time.perf_counter()
    records = list(iter_raw_records(text))
    assert time.perf_counter() - started < 2.0
    assert records == [RawRecord("Yandex Go", "07.01.24", "−850,00")]


def test_row_at_very_start_has_empty_description():
    assert list(iter_raw_records(" 05.01.24 - 10,00 ₸")) == [RawRecord("", "05.01.24", "- 10,00")]
