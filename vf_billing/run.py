"""
Server launcher
"""
import argparse
import os


def main():
    """Entry point"""
    parser = argparse.ArgumentParser(
        description='Visiting faculty billing portal'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        default=int(os.getenv('PORT', 8080)),
        help='server port (default: 8080)'
    )
    parser.add_argument(
        '--host',
        type=str,
        default=os.getenv('HOST', '127.0.0.1'),
        help='host address (default: 127.0.0.1)'
    )
    parser.add_argument(
        '--db',
        type=str,
        default=None,
        help='SQLite database path'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='run in debug mode'
    )

    args = parser.parse_args()

    # Settings are read from the environment at import time
    os.environ['PORT'] = str(args.port)
    os.environ['HOST'] = args.host
    if args.db:
        os.environ['VF_DB_PATH'] = args.db
    if args.debug:
        os.environ['DEBUG'] = 'true'

    from .backend.api import create_app
    app = create_app()

    print(f"""
============================================================
  Visiting Faculty Billing Portal
============================================================
  Starting server...
  URL: http://{args.host}:{args.port}

  Press Ctrl+C to stop
============================================================
    """)

    app.run(
        host=args.host,
        port=args.port,
        debug=args.debug
    )


if __name__ == '__main__':
    main()
