#!/usr/bin/env python
"""
Test runner script for the warehouse portal apps
Usage: python run_tests.py [app ...]   e.g. python run_tests.py orders inventory
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

APPS = ['core', 'orders', 'inventory', 'parties', 'staff', 'reports']


def test_labels(args):
    unknown = [name for name in args if name not in APPS]
    if unknown:
        sys.exit(f"Unknown app(s): {', '.join(unknown)}. Choose from: {', '.join(APPS)}")
    return [f'warehouse.{name}' for name in (args or APPS)]


if __name__ == "__main__":
    labels = test_labels(sys.argv[1:])
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'warehouse.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    failures = TestRunner(verbosity=2).run_tests(labels)
    sys.exit(bool(failures))
