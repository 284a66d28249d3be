# conftest.py
import os
import matplotlib

# Prevent Qt from creating real windows
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def pytest_configure():
    matplotlib.use("Agg", force=True)
