import logging
import os
from pathlib import Path

import pytest


if 'DEBUG' in os.environ:
    logging.basicConfig(level=logging.DEBUG)


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent
