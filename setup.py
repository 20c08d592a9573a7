#!/usr/bin/env python
''' Setup script '''

from setuptools import find_packages, setup

with open('requirements.txt') as req_file:
    REQUIREMENTS = req_file.read().splitlines()

with open('test-requirements.txt') as req_file:
    TEST_REQUIREMENTS = req_file.read().splitlines()

setup(
    name="rangelog",
    author="Bahtiar `kalkin-` Gadimov",
    author_email="bahtiar@gadimov.de",
    python_requires='>=3.10',
    classifiers=[
        "Operating System :: POSIX",
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)',  # noqa: E501
        'Topic :: Software Development :: Version Control :: Git'
    ],
    description="print the commits of a git revision range as text or json",
    keywords="git GitPython log revision range",
    long_description=
    '''Resolves a revision range (`from..to` or a single commit) in one of the repositories below a base directory and prints the commits in between, newest first, as plain text or as a JSON document.''',
    long_description_content_type='text/markdown',
    install_requires=REQUIREMENTS,
    extras_require={
        'test': TEST_REQUIREMENTS,
    },
    entry_points={
        'console_scripts': [
            'rangelog=rangelog.main:cli',
        ],
    },
    packages=find_packages(exclude=['tests', 'tests.*']),
    version="1.0.0")
