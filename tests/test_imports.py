import os
import subprocess
import sys

import pytest
from django.conf import settings

ENTRY_POINTS = [
    'import common.exceptions',
    'import apps.users.authentication',
    'import rest_framework.views',
    'import config.urls',
]


@pytest.mark.parametrize('first_import', ENTRY_POINTS)
def test_project_loads_in_a_fresh_interpreter(first_import):
    script = (
        'import django; django.setup(); '
        f'{first_import}; '
        'import config.urls; '
        'from django.core.management import call_command; call_command("check")'
    )
    env = {**os.environ, 'DJANGO_SETTINGS_MODULE': 'config.settings', 'DJANGO_ENV': 'development'}
    result = subprocess.run(
        [sys.executable, '-c', script],
        cwd=settings.BASE_DIR,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
