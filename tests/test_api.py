from io import BytesIO

import openpyxl

from tests.helpers import faculty_payload


def _register(client, **overrides):
    response = client.post('/api/auth/register', json=faculty_payload(**overrides))
    assert response.status_code == 201
    return response.get_json()['user']


def _create_bill(client, faculty_id=None, hours=10, month='March', year=2024, **overrides):
    body = {
        'className': 'B.Voc. IT I',
        'subject': 'Data Structures',
        'dates': '1st, 5th',
        'totalHours': hours,
        'month': month,
        'year': year,
    }
    if faculty_id:
        body['facultyId'] = faculty_id
    body.update(overrides)
    return client.post('/api/bills', json=body)


def test_health(client):
    response = client.get('/api/health')
    assert response.get_json()['status'] == 'ok'


def test_config_lists_months(client):
    data = client.get('/api/config').get_json()
    assert data['months'][0] == 'January'
    assert data['statuses'] == ['pending', 'approved', 'paid']


def test_login_failure(client):
    response = client.post('/api/auth/login', json={
        'email': 'admin@billing.com', 'password': 'bad', 'role': 'admin'
    })
    assert response.status_code == 401


def test_admin_routes_require_admin(client):
    assert client.get('/api/faculty').status_code == 401

    _register(client)
    assert client.get('/api/faculty').status_code == 403
    assert client.get('/api/export/faculty').status_code == 403


def test_register_duplicate_and_invalid(client):
    _register(client)
    client.post('/api/auth/logout')

    assert client.post('/api/auth/register', json=faculty_payload()).status_code == 409
    bad = client.post('/api/auth/register', json=faculty_payload(email='x@y.z', panNumber='SHORT'))
    assert bad.status_code == 400
    assert bad.get_json()['message'] == 'PAN number must be 10 characters'


def test_faculty_bills_are_their_own(client):
    user = _register(client)
    response = _create_bill(client, faculty_id='FAC-SOMEONE-ELSE')

    assert response.status_code == 201
    bill = response.get_json()['bill']
    assert bill['facultyId'] == user['id']
    assert bill['totalAmount'] == 5000
    assert bill['status'] == 'pending'

    me = client.get('/api/auth/me').get_json()
    assert me['faculty']['email'] == 'ravi@example.com'
    assert 'password' not in me['faculty']

    listed = client.get('/api/bills').get_json()
    assert [b['id'] for b in listed['bills']] == [bill['id']]


def test_admin_flow(admin_client):
    created = admin_client.post('/api/faculty', json=faculty_payload()).get_json()['faculty']
    other = admin_client.post(
        '/api/faculty', json=faculty_payload(name='Asha Verma', email='asha@example.com')
    ).get_json()['faculty']

    assert admin_client.put('/api/rate', json={'ratePerHour': 600}).get_json()['ratePerHour'] == 600
    assert admin_client.put('/api/rate', json={'ratePerHour': -1}).status_code == 400

    first = _create_bill(admin_client, created['id'], hours=5).get_json()['bill']
    _create_bill(admin_client, other['id'], hours=2, month='April')
    assert first['totalAmount'] == 3000

    patched = admin_client.patch(f"/api/bills/{first['id']}/status", json={'status': 'paid'})
    assert patched.get_json()['bill']['status'] == 'paid'
    assert admin_client.patch(f"/api/bills/{first['id']}/status", json={'status': 'x'}).status_code == 400

    march = admin_client.get('/api/bills?month=March&year=2024').get_json()
    assert len(march['bills']) == 1
    assert len(admin_client.get('/api/bills?q=asha').get_json()['bills']) == 1

    stats = admin_client.get('/api/stats').get_json()['stats']
    assert stats['total_faculty'] == 2
    assert stats['paid_amount'] == 3000
    assert stats['pending_amount'] == 1200

    detail = admin_client.get(f"/api/faculty/{created['id']}").get_json()
    assert len(detail['bills']) == 1

    deleted = admin_client.delete(f"/api/faculty/{created['id']}").get_json()
    assert deleted['bills_removed'] == 1
    assert len(admin_client.get('/api/bills').get_json()['bills']) == 1
    assert admin_client.get(f"/api/faculty/{created['id']}").status_code == 404


def test_non_finite_rate_and_hours_rejected(admin_client):
    faculty = admin_client.post('/api/faculty', json=faculty_payload()).get_json()['faculty']

    assert admin_client.put('/api/rate', json={'ratePerHour': 'nan'}).status_code == 400
    assert admin_client.put('/api/rate', json={'ratePerHour': 'inf'}).status_code == 400
    assert admin_client.get('/api/rate').get_json()['ratePerHour'] == 500
    assert _create_bill(admin_client, faculty['id'], hours='inf').status_code == 400
    assert _create_bill(admin_client, faculty['id'], hours='nan').status_code == 400

    _create_bill(admin_client, faculty['id'], hours=10)
    assert admin_client.get('/api/reports/ledger').status_code == 200
    summary = admin_client.get(
        '/api/reports/personal-summary?start_month=March&end_month=March&year=2024'
    )
    assert summary.get_json()['totals']['amount'] == 5000


def test_personal_summary_endpoint(admin_client):
    faculty = admin_client.post('/api/faculty', json=faculty_payload()).get_json()['faculty']
    _create_bill(admin_client, faculty['id'], hours=9, month='March')
    _create_bill(admin_client, faculty['id'], hours=11, month='April')

    data = admin_client.get(
        '/api/reports/personal-summary?start_month=March&end_month=April&year=2024'
    ).get_json()

    assert data['rows'][0]['name'] == 'RAVI SHARMA'
    assert data['rows'][0]['amount'] == 10000
    assert data['totals'] == {'amount': 10000, 'tax': 1000, 'totalPay': 9000}
    assert data['table']['rows'][-1][0] == 'TOTAL'

    inverted = admin_client.get(
        '/api/reports/personal-summary?start_month=April&end_month=March&year=2024'
    ).get_json()
    assert inverted['rows'] == []


def test_ledger_endpoint(admin_client):
    faculty = admin_client.post('/api/faculty', json=faculty_payload()).get_json()['faculty']
    _create_bill(admin_client, faculty['id'], hours=10)

    table = admin_client.get('/api/reports/ledger').get_json()['table']

    assert len(table['columns']) == 10
    assert table['rowKinds'] == ['entry', 'subtotal']
    assert table['totals']['tax'] == 500


def test_exports(admin_client):
    faculty = admin_client.post('/api/faculty', json=faculty_payload()).get_json()['faculty']
    _create_bill(admin_client, faculty['id'], hours=10)

    bills = admin_client.get('/api/export/bills')
    assert bills.status_code == 200
    ws = openpyxl.load_workbook(BytesIO(bills.data))['Bills']
    assert ws['B6'].value == 'Ravi Sharma'

    monthly = admin_client.get('/api/export/monthly-summary?month=March&year=2024')
    assert 'VF_Monthly_Summary_March_2024.xlsx' in monthly.headers['Content-Disposition']
    ws = openpyxl.load_workbook(BytesIO(monthly.data))['Monthly Summary']
    assert ws['A3'].value == 'Visiting Faculty Salary Bill March 2024'

    personal = admin_client.get(
        '/api/export/personal-summary?start_month=January&end_month=May&year=2024'
    )
    ws = openpyxl.load_workbook(BytesIO(personal.data))['Personal Summary']
    assert ws['E7'].value == 5000

    faculty_list = admin_client.get('/api/export/faculty')
    ws = openpyxl.load_workbook(BytesIO(faculty_list.data))['Faculty List']
    assert ws['A2'].value == 'Ravi Sharma'


def test_export_without_bills_or_period(admin_client):
    assert admin_client.get('/api/export/bills').status_code == 400
    assert admin_client.get('/api/export/faculty').status_code == 400
    assert admin_client.get('/api/export/monthly-summary').status_code == 400
    assert admin_client.get('/api/export/personal-summary?year=2024').status_code == 400
