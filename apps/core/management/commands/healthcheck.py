"""
==========================================================
SELF-DIAGNOSTIC HEALTH CHECK COMMAND
==========================================================
Run: python manage.py healthcheck

Checks:
  ✅ Database connection
  ✅ Migration status
  ✅ Installed apps and models
  ✅ Required packages
  ✅ Log file writability
  ✅ URL configuration (reverse the admin API routes)
  ✅ Constants and middleware
  ✅ Push provider credentials
  ✅ Notification outbox backlog
"""

import importlib
import logging
from io import StringIO
from pathlib import Path

from django.core.management.base import BaseCommand
from django.apps import apps
from django.conf import settings
from django.urls import reverse, NoReverseMatch

from core.monitor import SystemMonitor

logger = logging.getLogger('diagnostics')


class Command(BaseCommand):
    help = 'Run a self-diagnostic health check on the admin backend.'

    CHECKS = [
        'check_database',
        'check_migrations',
        'check_installed_apps',
        'check_models',
        'check_required_packages',
        'check_log_files',
        'check_urls',
        'check_constants',
        'check_middleware',
        'check_push_provider',
        'check_outbox',
    ]

    def handle(self, *args, **options):
        self.monitor = SystemMonitor()
        self.stdout.write(self.style.HTTP_INFO('\n' + '=' * 60))
        self.stdout.write(self.style.HTTP_INFO('  🏥  PLATFORM HEALTH CHECK'))
        self.stdout.write(self.style.HTTP_INFO('=' * 60 + '\n'))

        passed = 0
        failed = 0
        warnings = 0

        for check_name in self.CHECKS:
            method = getattr(self, check_name)
            try:
                result = method()
                if result == 'pass':
                    passed += 1
                elif result == 'warn':
                    warnings += 1
                else:
                    failed += 1
            except Exception as e:
                self.report_fail(check_name.replace('check_', '').replace('_', ' ').title(), str(e))
                failed += 1

        # Summary
        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(f'  RESULTS: ✅ {passed} passed | ⚠️  {warnings} warnings | ❌ {failed} failed')
        self.stdout.write('=' * 60 + '\n')

        if failed > 0:
            self.stdout.write(self.style.ERROR('⛔ Some checks FAILED. Review the output above.'))
            logger.error(f'Health check: {failed} checks failed, {warnings} warnings')
        elif warnings > 0:
            self.stdout.write(self.style.WARNING('⚠️  All checks passed with warnings.'))
            logger.warning(f'Health check: {warnings} warnings')
        else:
            self.stdout.write(self.style.SUCCESS('🎉 All checks PASSED! Platform is healthy.'))
            logger.info('Health check: All checks passed')

    def report_pass(self, name, detail=''):
        msg = f'  ✅ {name}'
        if detail:
            msg += f': {detail}'
        self.stdout.write(self.style.SUCCESS(msg))

    def report_fail(self, name, detail=''):
        msg = f'  ❌ {name}'
        if detail:
            msg += f': {detail}'
        self.stdout.write(self.style.ERROR(msg))

    def report_warn(self, name, detail=''):
        msg = f'  ⚠️  {name}'
        if detail:
            msg += f': {detail}'
        self.stdout.write(self.style.WARNING(msg))

    # -------------------------------------------------------
    # Individual Checks
    # -------------------------------------------------------

    def check_database(self):
        """Test database connectivity."""
        result = self.monitor.check_database()
        if result['status'] == 'Failed':
            self.report_fail('Database', f"Cannot connect: {result['error']}")
            return 'fail'
        engine = settings.DATABASES['default']['ENGINE']
        self.report_pass('Database', f'Connected ({engine.split(".")[-1]}, {result["durationMs"]}ms)')
        return 'pass'

    def check_migrations(self):
        """Check for unapplied migrations."""
        from django.core.management import call_command
        out = StringIO()
        call_command('showmigrations', '--plan', stdout=out)
        output = out.getvalue()
        unapplied = [line for line in output.splitlines() if line.strip().startswith('[ ]')]
        if unapplied:
            self.report_warn('Migrations', f'{len(unapplied)} unapplied migration(s)')
            for m in unapplied[:5]:
                self.stdout.write(f'         {m.strip()}')
            return 'warn'
        self.report_pass('Migrations', 'All applied')
        return 'pass'

    def check_installed_apps(self):
        """Verify all INSTALLED_APPS can be imported."""
        broken = []
        for app in settings.INSTALLED_APPS:
            try:
                importlib.import_module(app)
            except ImportError:
                broken.append(app)
        if broken:
            self.report_fail('Installed Apps', f'{len(broken)} broken: {", ".join(broken)}')
            return 'fail'
        self.report_pass('Installed Apps', f'{len(settings.INSTALLED_APPS)} apps loaded')
        return 'pass'

    def check_models(self):
        """Verify all models are properly registered."""
        model_count = len(apps.get_models())
        if model_count == 0:
            self.report_warn('Models', 'No models found')
            return 'warn'
        self.report_pass('Models', f'{model_count} models registered')
        return 'pass'

    def check_required_packages(self):
        """Verify critical Python packages are installed."""
        required = [
            ('django', 'Django'),
            ('cryptography', 'cryptography'),
            ('pusher', 'pusher'),
            ('requests', 'requests'),
            ('pydantic', 'pydantic'),
            ('decouple', 'python-decouple'),
        ]
        missing = []
        for module_name, display_name in required:
            try:
                importlib.import_module(module_name)
            except ImportError:
                missing.append(display_name)

        if missing:
            self.report_fail('Required Packages', f'Missing: {", ".join(missing)}')
            return 'fail'
        self.report_pass('Required Packages', f'All {len(required)} packages installed')
        return 'pass'

    def check_log_files(self):
        """Verify log directory is writable."""
        log_dir = Path(settings.BASE_DIR) / 'logs'
        if not log_dir.exists():
            try:
                log_dir.mkdir(parents=True)
                self.report_pass('Log Files', f'Created {log_dir}')
                return 'pass'
            except OSError as e:
                self.report_fail('Log Files', f'Cannot create log dir: {e}')
                return 'fail'

        log_files = list(log_dir.glob('*.log'))
        self.report_pass('Log Files', f'{len(log_files)} log file(s) in {log_dir}')
        return 'pass'

    def check_urls(self):
        """Test that the admin API routes resolve."""
        test_urls = [
            'api-dashboard', 'api-employer-list', 'api-employer-pending', 'api-job-list',
            'api-job-pending', 'api-notification-list', 'api-announcement-list',
            'api-support-list', 'api-escalation-list', 'api-settings', 'api-health',
        ]
        broken = []
        for url_name in test_urls:
            try:
                reverse(url_name)
            except NoReverseMatch:
                broken.append(url_name)
        if broken:
            self.report_fail('URL Config', f'{len(broken)} broken: {", ".join(broken)}')
            return 'fail'
        self.report_pass('URL Config', f'{len(test_urls)} routes verified')
        return 'pass'

    def check_constants(self):
        """Verify the config/constants module loads."""
        try:
            from config.constants import SITE_NAME, PAGINATION_DEFAULT, MSG_SESSION_EXPIRED
            if not SITE_NAME:
                self.report_warn('Constants', 'SITE_NAME is empty')
                return 'warn'
            self.report_pass('Constants', f'Loaded (SITE_NAME="{SITE_NAME}")')
            return 'pass'
        except ImportError as e:
            self.report_fail('Constants', f'Import error: {e}')
            return 'fail'

    def check_middleware(self):
        """Verify middleware chain is configured."""
        middleware = settings.MIDDLEWARE
        has_request_logging = 'config.middleware.RequestLoggingMiddleware' in middleware
        if has_request_logging:
            self.report_pass('Middleware', f'{len(middleware)} middleware active (incl. request logging)')
        else:
            self.report_warn('Middleware', f'{len(middleware)} middleware active (request logging not enabled)')
        return 'pass' if has_request_logging else 'warn'

    def check_push_provider(self):
        """Verify Pusher credentials are available (database or environment)."""
        result = self.monitor.check_push_provider()
        if result['source'] is None:
            self.report_warn('Push Provider', result['error'])
            return 'warn'
        mode = 'inline + outbox' if result['inline'] else 'outbox worker only'
        self.report_pass('Push Provider', f"Configured from {result['source']} ({mode})")
        return 'pass'

    def check_outbox(self):
        """Report pending and failed notification deliveries."""
        result = self.monitor.check_outbox()
        if result['status'] != 'Operational':
            self.report_warn('Notification Outbox', result['error'])
            return 'warn'
        self.report_pass('Notification Outbox', f"{result['pending']} pending, 0 failed")
        return 'pass'
