#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Server start script

Usage:
    python run_server.py [--port PORT] [--host HOST] [--db PATH] [--debug]
"""

from vf_billing.run import main


if __name__ == '__main__':
    main()
