"""Setup script for ndbinning package."""

from setuptools import setup, find_packages

setup(
    name='ndbinning',
    version='1.0',
    packages=find_packages(include=['ndbinning', 'ndbinning.*']),
    package_data={'ndbinning.config': ['defaults.yaml']},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.9.0',
        'matplotlib>=3.4.0',
        'pyyaml>=5.4',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'ndbinning=ndbinning.cli:main',
        ],
    },
)
