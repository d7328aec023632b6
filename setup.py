"""Packaging for RingTimer.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup, find_packages

APP = ["main.py"]
OPTIONS = {
    "argv_emulation": False,
    "plist": {
        "CFBundleName": "RingTimer",
        "CFBundleDisplayName": "RingTimer",
        "CFBundleIdentifier": "com.ringtimer.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    options={"py2app": OPTIONS},
    name="RingTimer",
    version="0.1.0",
    packages=find_packages(exclude=("tests",)),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["ringtimer = ringtimer.__main__:main"],
    },
)
