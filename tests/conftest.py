import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


SITE_PAGE = """
<!DOCTYPE html>
<html>
  <head><title>Site</title></head>
  <body>
    <a href="/ok.html">ok</a>
    <a href="missing.html">missing</a>
    <a href="https://external.test/page">external</a>
    <a href="/ok.html#top">ok again</a>
  </body>
</html>
"""


@pytest.fixture
def site_page():
    return SITE_PAGE
