import itertools
from datetime import datetime, timedelta, timezone

import pytest
from capability_review.services.submission_service import SubmissionService


def _make_clock(start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


@pytest.fixture
def ticking_clock():
    """Factory for clocks that advance one second per call."""
    return _make_clock


@pytest.fixture
def storage_file(tmp_path):
    return tmp_path / "data" / "capability-submissions.json"


@pytest.fixture
def store(storage_file):
    return SubmissionService(storage_path=storage_file, clock=_make_clock())


@pytest.fixture
def payload():
    return {
        "companyName": "Acme Robotics",
        "creditCode": "91320500MA1XXXXX",
        "companyScale": 120,
        "companyType": "private",
        "companyAddress": "Suzhou Industrial Park",
        "businessIntro": "Industrial automation",
        "coreProducts": ["arm controller", "vision kit"],
        "intellectualProperties": "software copyright",
        "contactName": "Li Wei",
        "contactInfo": "13800000000",
    }
