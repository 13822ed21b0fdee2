"""Setup for PomoTimer.

Install for development:
    pip install -e .[test]

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import find_packages, setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "PomoTimer",
        "CFBundleDisplayName": "PomoTimer",
        "CFBundleIdentifier": "com.pomotimer.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": True,  # tray-only, no Dock icon
    },
}

# py2app is only needed (and only installable) when bundling the app
bundle_kwargs = {}
if "py2app" in sys.argv:
    bundle_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="PomoTimer",
    version="0.1.0",
    description="Pomodoro work/break interval timer with a floating widget",
    packages=find_packages(include=["pomotimer", "pomotimer.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["pomotimer = pomotimer.__main__:main"],
    },
    **bundle_kwargs,
)
