from vf_billing.backend.aggregator import (
    PersonalSummaryAggregator,
    bills_in_period,
    filter_bills,
    group_for_personal_summary,
    month_index,
)

from tests.helpers import make_bill, make_faculty


def test_sums_one_faculty_across_months():
    faculty = [make_faculty('FAC-A')]
    bills = [
        make_bill('FAC-A', 4500, month='March', year=2024),
        make_bill('FAC-A', 5500, month='April', year=2024),
    ]

    result = group_for_personal_summary(bills, faculty, 'March', 'April', 2024)

    assert len(result.faculty_totals) == 1
    row = result.faculty_totals[0]
    assert row.faculty.id == 'FAC-A'
    assert row.amount == 10000
    assert row.tax == 1000
    assert row.pay == 9000
    assert result.totals.amount == 10000


def test_groups_by_faculty_only():
    faculty = [make_faculty('FAC-A')]
    bills = [
        make_bill('FAC-A', 1000, subject='DBMS'),
        make_bill('FAC-A', 2000, subject='Networks', class_name='Practical'),
    ]

    result = group_for_personal_summary(bills, faculty, 'January', 'December', 2024)

    assert len(result.faculty_totals) == 1
    assert result.faculty_totals[0].amount == 3000


def test_tax_rounded_on_faculty_total():
    faculty = [make_faculty('FAC-A')]
    bills = [make_bill('FAC-A', 15, rate=5), make_bill('FAC-A', 15, rate=5)]

    result = group_for_personal_summary(bills, faculty, 'March', 'March', 2024)

    assert result.faculty_totals[0].tax == 3
    assert result.faculty_totals[0].pay == 27


def test_single_month_period():
    faculty = [make_faculty('FAC-A')]
    bills = [
        make_bill('FAC-A', 1000, month='February'),
        make_bill('FAC-A', 2000, month='March'),
        make_bill('FAC-A', 4000, month='April'),
        make_bill('FAC-A', 8000, month='March', year=2023),
    ]

    result = group_for_personal_summary(bills, faculty, 'March', 'March', 2024)

    assert result.faculty_totals[0].amount == 2000


def test_end_before_start_is_empty():
    faculty = [make_faculty('FAC-A')]
    bills = [make_bill('FAC-A', 1000, month=m) for m in ('January', 'June', 'December')]

    result = group_for_personal_summary(bills, faculty, 'June', 'March', 2024)

    assert result.faculty_totals == []
    assert result.totals.amount == 0
    assert result.totals.tax == 0
    assert result.totals.pay == 0


def test_unknown_faculty_is_skipped():
    faculty = [make_faculty('FAC-A')]
    bills = [
        make_bill('FAC-A', 1000),
        make_bill('FAC-GONE', 7000),
    ]

    result = group_for_personal_summary(bills, faculty, 'March', 'March', 2024)

    assert [ft.faculty.id for ft in result.faculty_totals] == ['FAC-A']
    assert result.totals.amount == 1000


def test_first_encountered_order_and_grand_totals():
    faculty = [make_faculty('FAC-A', name='Asha'), make_faculty('FAC-B', name='Bina')]
    bills = [
        make_bill('FAC-B', 1005),
        make_bill('FAC-A', 2000),
        make_bill('FAC-B', 1000),
    ]

    result = group_for_personal_summary(bills, faculty, 'January', 'December', 2024)

    assert [ft.faculty.id for ft in result.faculty_totals] == ['FAC-B', 'FAC-A']
    assert result.faculty_totals[0].amount == 2005
    assert result.faculty_totals[0].tax == 201  # 200.5 rounds up
    assert result.totals.amount == 4005
    assert result.totals.tax == 401
    assert result.totals.pay == 3604


def test_to_dict_for_display():
    faculty = [make_faculty('FAC-A', name='Asha Verma', bank_name='SBI')]
    result = group_for_personal_summary(
        [make_bill('FAC-A', 4500)], faculty, 'March', 'March', 2024
    )

    data = result.to_dict()

    assert data['rows'] == [{
        'sno': 1,
        'name': 'ASHA VERMA',
        'bankDetails': 'SBI',
        'panNumber': 'ABCDE1234F',
        'amount': 4500,
        'tax': 450,
        'totalPay': 4050,
    }]
    assert data['totals'] == {'amount': 4500, 'tax': 450, 'totalPay': 4050}


def test_month_index():
    assert month_index('January') == 0
    assert month_index('December') == 11
    assert month_index('Smarch') == -1


def test_unknown_selector_month_selects_nothing():
    bills = [make_bill('FAC-A', 1000, month='March')]
    assert bills_in_period(bills, 'Marchh', 'April', 2024) == []


def test_filter_bills_by_month_year_and_search():
    bills = [
        make_bill('FAC-1', 1000, month='March', faculty_name='Asha Verma'),
        make_bill('FAC-2', 1000, month='March', faculty_name='Ravi Sharma'),
        make_bill('FAC-2', 1000, month='April', faculty_name='Ravi Sharma'),
        make_bill('FAC-1', 1000, month='March', year=2023, faculty_name='Asha Verma'),
    ]

    assert len(filter_bills(bills)) == 4
    assert len(filter_bills(bills, month='March')) == 3
    assert len(filter_bills(bills, month='March', year=2024)) == 2
    assert [b.faculty_id for b in filter_bills(bills, search='ravi')] == ['FAC-2', 'FAC-2']
    assert len(filter_bills(bills, search='fac-1', year=2024)) == 1


def test_aggregate_twice_gives_same_result():
    faculty = [make_faculty('FAC-A')]
    bills = [make_bill('FAC-A', 4500), make_bill('FAC-A', 5500, month='April')]
    aggregator = PersonalSummaryAggregator(bills, faculty, 'March', 'April', 2024)

    aggregator.aggregate()
    result = aggregator.aggregate()

    assert len(result.faculty_totals) == 1
    assert result.faculty_totals[0].amount == 10000
    assert result.totals.to_dict()['tax'] == 1000
