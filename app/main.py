# app/main.py
# Run from a source checkout without installing: python app/main.py
import os, sys

APP_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(APP_DIR)
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
for p in (SRC_DIR, PROJECT_ROOT):
    if p not in sys.path:
        sys.path.insert(0, p)

from posetracker.launcher import main

if __name__ == "__main__":
    sys.exit(main())
