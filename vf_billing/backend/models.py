"""
Data model
Stored as JSON using camelCase keys
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


def _parse_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now()
    # tolerate the trailing Z written by JavaScript Date.toJSON()
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


@dataclass
class FacultyRecord:
    """Faculty profile and payment details"""
    id: str
    name: str
    email: str
    phone: str
    bank_account_number: str
    ifsc_code: str
    bank_name: str
    pan_number: str
    aadhar_number: str
    password: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to the stored dictionary form"""
        data = self.to_public_dict()
        if self.password is not None:
            data['password'] = self.password
        return data

    def to_public_dict(self) -> dict:
        """Dictionary form without the credential"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'bankAccountNumber': self.bank_account_number,
            'ifscCode': self.ifsc_code,
            'bankName': self.bank_name,
            'panNumber': self.pan_number,
            'aadharNumber': self.aadhar_number,
            'createdAt': self.created_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FacultyRecord':
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            bank_account_number=data.get('bankAccountNumber', ''),
            ifsc_code=data.get('ifscCode', ''),
            bank_name=data.get('bankName', ''),
            pan_number=data.get('panNumber', ''),
            aadhar_number=data.get('aadharNumber', ''),
            password=data.get('password'),
            created_at=_parse_datetime(data.get('createdAt'))
        )


@dataclass
class BillEntry:
    """
    One billable teaching record

    total_amount is computed once when the bill is created
    (total_hours * rate_per_hour) and is never recomputed.
    """
    id: str
    faculty_id: str
    faculty_name: str
    class_name: str
    subject: str
    dates: List[str]
    total_hours: float
    rate_per_hour: float
    total_amount: float
    month: str
    year: int
    status: str = 'pending'
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def month_year(self) -> str:
        """Short period label, e.g. "Mar-24" """
        return f"{self.month[:3]}-{str(self.year)[-2:]}"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'facultyId': self.faculty_id,
            'facultyName': self.faculty_name,
            'className': self.class_name,
            'subject': self.subject,
            'dates': list(self.dates),
            'totalHours': self.total_hours,
            'ratePerHour': self.rate_per_hour,
            'totalAmount': self.total_amount,
            'month': self.month,
            'year': self.year,
            'status': self.status,
            'createdAt': self.created_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'BillEntry':
        return cls(
            id=data['id'],
            faculty_id=data['facultyId'],
            faculty_name=data.get('facultyName', ''),
            class_name=data.get('className', ''),
            subject=data.get('subject', ''),
            dates=list(data.get('dates') or []),
            total_hours=data.get('totalHours', 0),
            rate_per_hour=data.get('ratePerHour', 0),
            total_amount=data.get('totalAmount', 0),
            month=data.get('month', ''),
            year=int(data.get('year', 0)),
            status=data.get('status', 'pending'),
            created_at=_parse_datetime(data.get('createdAt'))
        )


@dataclass
class RateConfig:
    """Global hourly rate"""
    rate_per_hour: float

    def to_dict(self) -> dict:
        return {'ratePerHour': self.rate_per_hour}


@dataclass
class User:
    """Logged-in identity"""
    id: str
    email: str
    name: str
    role: str  # 'faculty' or 'admin'

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'User':
        return cls(
            id=data['id'],
            email=data['email'],
            name=data['name'],
            role=data['role']
        )


@dataclass
class AdminUser:
    """Administrator account"""
    id: str
    email: str
    name: str
    password: str
    role: str = 'admin'

    def to_user(self) -> User:
        return User(id=self.id, email=self.email, name=self.name, role='admin')

    @classmethod
    def from_dict(cls, data: dict) -> 'AdminUser':
        return cls(
            id=data['id'],
            email=data['email'],
            name=data.get('name', 'Admin'),
            password=data['password']
        )
