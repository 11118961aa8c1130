"""
Record service
Faculty, bill and rate records on top of the key-value store
"""
import math
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging

from ... import database
from ...config import BILL_STATUSES, DEFAULT_RATE_PER_HOUR, MONTHS
from ..models import AdminUser, BillEntry, FacultyRecord

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a faculty or bill id does not exist"""
    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")


class DuplicateEmailError(ValueError):
    """Raised when registering an email that is already in use"""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


def validate_faculty_data(data: dict) -> None:
    """
    Check faculty profile fields

    Raises:
        ValueError: first failing field
    """
    def text(name):
        return str(data.get(name) or '').strip()

    if not text('name'):
        raise ValueError('Name is required')
    if '@' not in text('email'):
        raise ValueError('Valid email is required')
    if len(text('phone')) < 10:
        raise ValueError('Valid phone number is required')
    if len(text('bankAccountNumber')) < 9:
        raise ValueError('Valid bank account number is required')
    if len(text('ifscCode')) != 11:
        raise ValueError('IFSC code must be 11 characters')
    if not text('bankName'):
        raise ValueError('Bank name is required')
    if len(text('panNumber')) != 10:
        raise ValueError('PAN number must be 10 characters')
    if len(text('aadharNumber')) != 12:
        raise ValueError('Aadhar number must be 12 digits')


def parse_dates(dates: Union[str, Iterable[str], None]) -> List[str]:
    """Lecture date labels from a comma separated string or a list"""
    if dates is None:
        return []
    if isinstance(dates, str):
        dates = dates.split(',')
    return [str(d).strip() for d in dates if str(d).strip()]


class DatabaseService:
    """
    Record service

    Every read loads the whole slot. Writes read, modify and rewrite a
    slot under the store's write lock.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Args:
            db_path: SQLite file path
        """
        self.db_path = db_path or database.DEFAULT_DB_PATH
        database.init_database(self.db_path)

    # ========== faculty ==========

    def list_faculty(self) -> List[FacultyRecord]:
        data = database.get_value(database.FACULTY_KEY, [], self.db_path)
        return [FacultyRecord.from_dict(d) for d in data]

    def search_faculty(self, query: Optional[str] = None) -> List[FacultyRecord]:
        """Case-insensitive match on name, id or email"""
        faculty = self.list_faculty()
        q = (query or '').lower()
        if not q:
            return faculty
        return [
            f for f in faculty
            if q in f.name.lower() or q in f.id.lower() or q in f.email.lower()
        ]

    def get_faculty(self, faculty_id: str) -> FacultyRecord:
        for f in self.list_faculty():
            if f.id == faculty_id:
                return f
        raise RecordNotFoundError('Faculty', faculty_id)

    def find_faculty_by_email(self, email: str) -> Optional[FacultyRecord]:
        for f in self.list_faculty():
            if f.email == email:
                return f
        return None

    def create_faculty(self, data: dict, password: Optional[str] = None) -> FacultyRecord:
        """
        Add a faculty record

        Args:
            data: profile fields (camelCase keys)
            password: login credential, omitted for admin-created records

        Returns:
            FacultyRecord: stored record with a new id
        """
        validate_faculty_data(data)
        email = str(data['email']).strip()
        record = FacultyRecord(
            id='',
            name=str(data['name']).strip(),
            email=email,
            phone=str(data['phone']).strip(),
            bank_account_number=str(data['bankAccountNumber']).strip(),
            ifsc_code=str(data['ifscCode']).strip().upper(),
            bank_name=str(data['bankName']).strip(),
            pan_number=str(data['panNumber']).strip().upper(),
            aadhar_number=str(data['aadharNumber']).strip(),
            password=password
        )

        def add(values):
            faculty = [FacultyRecord.from_dict(d) for d in values[database.FACULTY_KEY]]
            if any(f.email == email for f in faculty):
                raise DuplicateEmailError(email)
            record.id = self._next_faculty_id(f.id for f in faculty)
            faculty.append(record)
            return {database.FACULTY_KEY: [f.to_dict() for f in faculty]}

        database.update_values({database.FACULTY_KEY: []}, add, self.db_path)
        logger.info(f"Faculty registered: {record.id} ({record.name})")
        return record

    def delete_faculty(self, faculty_id: str) -> int:
        """
        Delete a faculty record together with all of its bills

        Returns:
            int: number of bills removed
        """
        removed = 0

        def remove(values):
            nonlocal removed
            faculty = values[database.FACULTY_KEY]
            remaining = [f for f in faculty if f['id'] != faculty_id]
            if len(remaining) == len(faculty):
                raise RecordNotFoundError('Faculty', faculty_id)
            bills = values[database.BILLS_KEY]
            kept_bills = [b for b in bills if b['facultyId'] != faculty_id]
            removed = len(bills) - len(kept_bills)
            return {database.FACULTY_KEY: remaining, database.BILLS_KEY: kept_bills}

        database.update_values(
            {database.FACULTY_KEY: [], database.BILLS_KEY: []}, remove, self.db_path
        )
        logger.info(f"Faculty deleted: {faculty_id} ({removed} bills removed)")
        return removed

    @staticmethod
    def _next_faculty_id(existing: Iterable[str]) -> str:
        taken = set(existing)
        millis = int(time.time() * 1000)
        while f"FAC-{millis}" in taken:
            millis += 1
        return f"FAC-{millis}"

    # ========== bills ==========

    def list_bills(self) -> List[BillEntry]:
        data = database.get_value(database.BILLS_KEY, [], self.db_path)
        return [BillEntry.from_dict(d) for d in data]

    def bills_for_faculty(self, faculty_id: str) -> List[BillEntry]:
        return [b for b in self.list_bills() if b.faculty_id == faculty_id]

    def create_bill(
        self,
        faculty_id: str,
        class_name: str,
        subject: str,
        dates,
        total_hours,
        month: str,
        year
    ) -> BillEntry:
        """
        Create a pending bill at the current hourly rate

        The rate and the amount are stored on the bill and are not
        affected by later rate changes.

        Raises:
            ValueError: invalid field
            RecordNotFoundError: unknown faculty
        """
        if not faculty_id:
            raise ValueError('Please select a faculty member')
        if not str(class_name or '').strip():
            raise ValueError('Class name is required')
        if not str(subject or '').strip():
            raise ValueError('Subject is required')
        date_labels = parse_dates(dates)
        if not date_labels:
            raise ValueError('Lecture dates are required')
        try:
            hours = float(total_hours)
        except (TypeError, ValueError):
            raise ValueError('Valid total hours required')
        if not math.isfinite(hours) or hours <= 0:
            raise ValueError('Valid total hours required')
        if month not in MONTHS:
            raise ValueError('Please select a month')
        try:
            year = int(year)
        except (TypeError, ValueError):
            raise ValueError('Year is required')

        faculty = self.get_faculty(faculty_id)
        rate = self.get_rate()

        bill = BillEntry(
            id=f"BILL-{uuid.uuid4().hex}",
            faculty_id=faculty.id,
            faculty_name=faculty.name,
            class_name=str(class_name).strip(),
            subject=str(subject).strip(),
            dates=date_labels,
            total_hours=hours,
            rate_per_hour=rate,
            total_amount=hours * rate,
            month=month,
            year=year,
            status='pending'
        )
        self._update_bills(lambda bills: bills + [bill])
        logger.info(f"Bill created: {bill.id} for {faculty.id}, amount {bill.total_amount:,.2f}")
        return bill

    def update_bill_status(self, bill_id: str, status: str) -> BillEntry:
        """Set a bill status; any status may follow any other"""
        if status not in BILL_STATUSES:
            raise ValueError(f"Invalid status: {status}")

        changed = []

        def apply(bills):
            for bill in bills:
                if bill.id == bill_id:
                    bill.status = status
                    changed.append(bill)
                    return bills
            raise RecordNotFoundError('Bill', bill_id)

        self._update_bills(apply)
        logger.info(f"Bill status changed: {bill_id} -> {status}")
        return changed[0]

    def _update_bills(self, update) -> None:
        """Rewrite the bill list under the store's write lock"""
        def apply(values):
            bills = [BillEntry.from_dict(d) for d in values[database.BILLS_KEY]]
            return {database.BILLS_KEY: [b.to_dict() for b in update(bills)]}

        database.update_values({database.BILLS_KEY: []}, apply, self.db_path)

    # ========== rate ==========

    def get_rate(self) -> float:
        return float(database.get_value(database.RATE_KEY, DEFAULT_RATE_PER_HOUR, self.db_path))

    def set_rate(self, rate) -> float:
        """Overwrite the hourly rate; applies to bills created afterwards"""
        try:
            new_rate = float(rate)
        except (TypeError, ValueError):
            raise ValueError('Please enter a valid rate')
        if not math.isfinite(new_rate) or new_rate <= 0:
            raise ValueError('Please enter a valid rate')
        database.set_value(database.RATE_KEY, new_rate, self.db_path)
        logger.info(f"Rate per hour set to {new_rate:,.2f}")
        return new_rate

    # ========== admins / stats ==========

    def list_admins(self) -> List[AdminUser]:
        data = database.get_value(database.ADMINS_KEY, [], self.db_path)
        return [AdminUser.from_dict(d) for d in data]

    def get_stats(self) -> dict:
        """Dashboard figures"""
        bills = self.list_bills()
        pending = [b for b in bills if b.status == 'pending']
        paid = [b for b in bills if b.status == 'paid']
        return {
            'total_faculty': len(self.list_faculty()),
            'total_bills': len(bills),
            'total_amount': sum(b.total_amount for b in bills),
            'pending_amount': sum(b.total_amount for b in pending),
            'paid_amount': sum(b.total_amount for b in paid),
            'pending_count': len(pending),
            'paid_count': len(paid),
            'rate_per_hour': self.get_rate()
        }
