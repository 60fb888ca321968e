"""setuptools setup for Locked and Flow.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup

setup(
    name="lockedflow",
    version="0.1.0",
    description="Start/pause/stop productivity timer with a Pomodoro-style target",
    packages=["lockedflow", "lockedflow.timer"],
    python_requires=">=3.10",
    install_requires=["PyQt6>=6.4"],
    extras_require={"test": ["pytest>=7"]},
)
