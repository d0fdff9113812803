#!/usr/bin/python3

from setuptools import setup, find_namespace_packages
from version import version


setup(
    name = 'motecld',
    version = version,
    description = 'Writer for MoTeC .ld telemetry log files',
    packages = find_namespace_packages(include=['motecld']),
    python_requires = '>=3.8',
    install_requires = [
        'numpy',
        'dacite>=1.7',
        'PyYAML',
    ],
    extras_require = {
        'test': ['pytest>=7'],
    },
    include_package_data=False,
)
