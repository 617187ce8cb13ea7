# -*- coding: utf-8 -*-
import pathlib
import site
import sys

import setuptools

# odd bug with develop (editable) installs, see: https://github.com/pypa/pip/issues/7953
site.ENABLE_USER_SITE = "--user" in sys.argv[1:]

required = [
    "httpx>=0.25",
    "mashumaro>=3.11",  # codecs.basic
    "simplejson>=3.19.2",
    "loguru",
    "rich>=13.0.0",
    "click>=8.0.0",
]

test_required = [
    "pytest",
]

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

# Read version
version = {}
with open(here / "src/qprotocol/_version.py", "r") as f:
    exec(f.read(), version)

if __name__ == "__main__":
    setuptools.setup(
        name="qprotocol",
        version=version["__version__"],
        description="Python client for the QServer instrument-control REST protocol.",
        long_description=long_description,
        long_description_content_type="text/markdown",
        keywords=[
            "QServer",
            "REST",
            "instrument control",
            "data acquisition",
        ],
        classifiers=[
            "License :: OSI Approved :: MIT License",
            "Development Status :: 3 - Alpha",
        ],
        license="MIT",
        package_dir={"": "src"},
        packages=setuptools.find_packages(
            where="src",
            exclude=["*.test", "*.test.*", "test.*", "test", "test_*"],
        ),
        entry_points={
            "console_scripts": [
                "qprotocol=qprotocol.cli:cli",
            ],
        },
        install_requires=required,
        extras_require={"test": test_required},
        python_requires=">= 3.11",
    )
