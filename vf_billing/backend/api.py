"""
Flask API endpoints
"""
from flask import Flask, request, jsonify, send_file, session, g
from flask_cors import CORS
from pathlib import Path
import logging
from datetime import datetime

from ..config import BILL_STATUSES, MONTHS, get_config
from .models import AdminUser, RateConfig
from .decorators import admin_required, login_required
from .aggregator import build_personal_summary_report, filter_bills
from .services import (
    AuthService,
    DatabaseService,
    DuplicateEmailError,
    ExportService,
    RecordNotFoundError,
)

# Logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _error(message, code):
    return jsonify({'status': 'error', 'message': message}), code


def create_app(config=None):
    """
    Flask application factory

    Args:
        config: settings object (default: selected by FLASK_ENV)

    Returns:
        Flask: application instance
    """
    app = Flask(__name__)

    if config:
        app.config.from_object(config)
    else:
        app.config.from_object(get_config())

    app.config.setdefault('OUTPUT_DIR', Path.home() / 'Downloads')

    CORS(app, origins=app.config.get('CORS_ORIGINS', ["http://localhost:*"]), supports_credentials=True)

    # Services
    db_service = DatabaseService(Path(app.config['DB_PATH']))
    default_admin = AdminUser(
        id=app.config['ADMIN_ID'],
        email=app.config['ADMIN_EMAIL'],
        name=app.config['ADMIN_NAME'],
        password=app.config['ADMIN_PASSWORD']
    )
    auth_service = AuthService(db_service, default_admin)
    export_service = ExportService(db_service, Path(app.config['OUTPUT_DIR']))

    app.extensions['vf_billing'] = {
        'db': db_service,
        'auth': auth_service,
        'export': export_service
    }

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check"""
        return jsonify({'status': 'ok', 'timestamp': datetime.now().isoformat()})

    @app.route('/api/config', methods=['GET'])
    def get_app_config():
        """Selector values for the front-end"""
        return jsonify({
            'months': MONTHS,
            'statuses': list(BILL_STATUSES),
            'years': list(range(2020, datetime.now().year + 2)),
            'current_year': datetime.now().year,
            'current_month': MONTHS[datetime.now().month - 1]
        })

    # ========== auth ==========

    @app.route('/api/auth/register', methods=['POST'])
    def register():
        """Faculty self-registration, logs the new user in"""
        try:
            data = request.get_json() or {}
            user = auth_service.register(data)
            session['user'] = user.to_dict()
            return jsonify({'status': 'success', 'user': user.to_dict()}), 201

        except DuplicateEmailError as e:
            logger.error(f"Registration error: {e}")
            return _error(str(e), 409)
        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Registration error: {e}")
            return _error(str(e), 500)

    @app.route('/api/auth/login', methods=['POST'])
    def login():
        """Login as faculty or admin"""
        try:
            data = request.get_json() or {}
            user = auth_service.login(
                data.get('email', ''),
                data.get('password', ''),
                data.get('role', 'faculty')
            )
            if user is None:
                return _error('Invalid credentials', 401)

            session['user'] = user.to_dict()
            return jsonify({'status': 'success', 'user': user.to_dict()})

        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Login error: {e}")
            return _error(str(e), 500)

    @app.route('/api/auth/logout', methods=['POST'])
    def logout():
        session.pop('user', None)
        return jsonify({'status': 'success'})

    @app.route('/api/auth/me', methods=['GET'])
    @login_required
    def me():
        """Current user, with the profile for faculty"""
        details = auth_service.get_faculty_details(g.user)
        return jsonify({
            'status': 'success',
            'user': g.user.to_dict(),
            'faculty': details.to_public_dict() if details else None
        })

    # ========== faculty ==========

    @app.route('/api/faculty', methods=['GET'])
    @admin_required
    def list_faculty():
        faculty = db_service.search_faculty(request.args.get('q'))
        return jsonify({
            'status': 'success',
            'faculty': [f.to_public_dict() for f in faculty]
        })

    @app.route('/api/faculty', methods=['POST'])
    @admin_required
    def create_faculty():
        """Admin-created faculty record"""
        try:
            data = request.get_json() or {}
            record = db_service.create_faculty(data, password=data.get('password') or None)
            return jsonify({'status': 'success', 'faculty': record.to_public_dict()}), 201

        except DuplicateEmailError as e:
            logger.error(f"Faculty create error: {e}")
            return _error(str(e), 409)
        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Faculty create error: {e}")
            return _error(str(e), 500)

    @app.route('/api/faculty/<faculty_id>', methods=['GET'])
    @admin_required
    def get_faculty(faculty_id):
        """Faculty details with their bills"""
        try:
            record = db_service.get_faculty(faculty_id)
            bills = db_service.bills_for_faculty(faculty_id)
            return jsonify({
                'status': 'success',
                'faculty': record.to_public_dict(),
                'bills': [b.to_dict() for b in bills]
            })

        except RecordNotFoundError as e:
            return _error(str(e), 404)

    @app.route('/api/faculty/<faculty_id>', methods=['DELETE'])
    @admin_required
    def delete_faculty(faculty_id):
        """Delete a faculty member and their bills"""
        try:
            removed = db_service.delete_faculty(faculty_id)
            return jsonify({
                'status': 'success',
                'message': 'Faculty and their bills have been removed',
                'bills_removed': removed
            })

        except RecordNotFoundError as e:
            return _error(str(e), 404)
        except Exception as e:
            logger.error(f"Faculty delete error: {e}")
            return _error(str(e), 500)

    # ========== bills ==========

    @app.route('/api/bills', methods=['GET'])
    @login_required
    def list_bills():
        """Admin: all bills with filters. Faculty: own bills"""
        if g.user.role == 'admin':
            bills = filter_bills(
                db_service.list_bills(),
                month=request.args.get('month'),
                year=request.args.get('year', type=int),
                search=request.args.get('q')
            )
        else:
            bills = db_service.bills_for_faculty(g.user.id)

        return jsonify({
            'status': 'success',
            'bills': [b.to_dict() for b in bills],
            'total_amount': sum(b.total_amount for b in bills)
        })

    @app.route('/api/bills', methods=['POST'])
    @login_required
    def create_bill():
        """Create a bill; faculty members always bill themselves"""
        try:
            data = request.get_json() or {}
            if g.user.role == 'faculty':
                faculty_id = g.user.id
            else:
                faculty_id = data.get('facultyId')

            bill = db_service.create_bill(
                faculty_id=faculty_id,
                class_name=data.get('className'),
                subject=data.get('subject'),
                dates=data.get('dates'),
                total_hours=data.get('totalHours'),
                month=data.get('month'),
                year=data.get('year')
            )
            return jsonify({'status': 'success', 'bill': bill.to_dict()}), 201

        except RecordNotFoundError as e:
            logger.error(f"Bill create error: {e}")
            return _error(str(e), 404)
        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Bill create error: {e}")
            return _error(str(e), 500)

    @app.route('/api/bills/<bill_id>/status', methods=['PATCH'])
    @admin_required
    def update_bill_status(bill_id):
        try:
            data = request.get_json() or {}
            bill = db_service.update_bill_status(bill_id, data.get('status'))
            return jsonify({'status': 'success', 'bill': bill.to_dict()})

        except RecordNotFoundError as e:
            return _error(str(e), 404)
        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Status update error: {e}")
            return _error(str(e), 500)

    # ========== rate / stats ==========

    @app.route('/api/rate', methods=['GET'])
    @login_required
    def get_rate():
        return jsonify({'status': 'success', **RateConfig(db_service.get_rate()).to_dict()})

    @app.route('/api/rate', methods=['PUT'])
    @admin_required
    def update_rate():
        try:
            data = request.get_json() or {}
            rate = db_service.set_rate(data.get('ratePerHour'))
            return jsonify({'status': 'success', **RateConfig(rate).to_dict()})

        except ValueError as e:
            logger.error(f"Validation error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Rate update error: {e}")
            return _error(str(e), 500)

    @app.route('/api/stats', methods=['GET'])
    @admin_required
    def get_stats():
        return jsonify({'status': 'success', 'stats': db_service.get_stats()})

    # ========== reports ==========

    @app.route('/api/reports/personal-summary', methods=['GET'])
    @admin_required
    def personal_summary():
        """On-screen personal summary"""
        try:
            start_month = request.args.get('start_month', 'January')
            end_month = request.args.get('end_month', 'May')
            year = request.args.get('year', default=datetime.now().year, type=int)

            result = export_service.personal_summary(start_month, end_month, year)
            table = build_personal_summary_report(result)
            return jsonify({
                'status': 'success',
                **result.to_dict(),
                'table': table.to_dict()
            })

        except Exception as e:
            logger.error(f"Personal summary error: {e}")
            return _error(str(e), 500)

    @app.route('/api/reports/ledger', methods=['GET'])
    @admin_required
    def ledger():
        """On-screen ledger with the same filters as the bill list"""
        try:
            table = export_service.ledger_table(
                month=request.args.get('month'),
                year=request.args.get('year', type=int),
                search=request.args.get('q')
            )
            return jsonify({'status': 'success', 'table': table.to_dict()})

        except Exception as e:
            logger.error(f"Ledger error: {e}")
            return _error(str(e), 500)

    # ========== exports ==========

    def _download(path: Path):
        return send_file(
            str(path),
            as_attachment=True,
            download_name=path.name
        )

    @app.route('/api/export/bills', methods=['GET'])
    @admin_required
    def export_bills():
        try:
            path = export_service.export_bills(
                month=request.args.get('month'),
                year=request.args.get('year', type=int),
                search=request.args.get('q')
            )
            return _download(path)

        except ValueError as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 500)

    @app.route('/api/export/monthly-summary', methods=['GET'])
    @admin_required
    def export_monthly_summary():
        try:
            path = export_service.export_monthly_summary(
                request.args.get('month'),
                request.args.get('year', type=int)
            )
            return _download(path)

        except ValueError as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 500)

    @app.route('/api/export/personal-summary', methods=['GET'])
    @admin_required
    def export_personal_summary():
        try:
            path = export_service.export_personal_summary(
                request.args.get('start_month'),
                request.args.get('end_month'),
                request.args.get('year', type=int)
            )
            return _download(path)

        except ValueError as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 500)

    @app.route('/api/export/faculty', methods=['GET'])
    @admin_required
    def export_faculty():
        try:
            return _download(export_service.export_faculty_list())

        except ValueError as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 400)
        except Exception as e:
            logger.error(f"Export error: {e}")
            return _error(str(e), 500)

    return app
