from setuptools import setup, find_packages
import re

# Read version from timerecon/__init__.py
with open('timerecon/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='timesheet-recon',
    version=version,
    packages=find_packages(include=['timerecon', 'timerecon.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'timesheet-recon=timerecon.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Reconcile official and secondary timesheet records day by day.',
    python_requires='>=3.10',
)
