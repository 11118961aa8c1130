"""
Record factories for tests
"""
from vf_billing.backend.models import BillEntry, FacultyRecord

_counter = {'bill': 0}


def make_faculty(faculty_id='FAC-1', name='Asha Verma', pan_number='ABCDE1234F',
                 bank_name='State Bank of India', **overrides):
    data = dict(
        id=faculty_id,
        name=name,
        email=f"{faculty_id.lower()}@example.com",
        phone='9876543210',
        bank_account_number='123456789012',
        ifsc_code='SBIN0001234',
        bank_name=bank_name,
        pan_number=pan_number,
        aadhar_number='123412341234',
    )
    data.update(overrides)
    return FacultyRecord(**data)


def make_bill(faculty_id='FAC-1', amount=5000, subject='Data Structures',
              class_name='B.Voc. IT I', month='March', year=2024, rate=500,
              faculty_name=None, status='pending'):
    _counter['bill'] += 1
    return BillEntry(
        id=f"BILL-{_counter['bill']}",
        faculty_id=faculty_id,
        faculty_name=faculty_name or f"Faculty {faculty_id}",
        class_name=class_name,
        subject=subject,
        dates=['1st', '5th'],
        total_hours=amount / rate,
        rate_per_hour=rate,
        total_amount=amount,
        month=month,
        year=year,
        status=status,
    )


def faculty_payload(**overrides):
    """Valid registration / create-faculty request body"""
    data = {
        'name': 'Ravi Sharma',
        'email': 'ravi@example.com',
        'phone': '9876543210',
        'bankAccountNumber': '123456789012',
        'ifscCode': 'SBIN0001234',
        'bankName': 'State Bank of India',
        'panNumber': 'ABCDE1234F',
        'aadharNumber': '123412341234',
        'password': 'secret123',
    }
    data.update(overrides)
    return data
