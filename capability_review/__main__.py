"""Allow running as: python -m capability_review"""

import sys

from capability_review.main import run

if __name__ == "__main__":
    sys.exit(run())
