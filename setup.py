#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
from pathlib import Path

setup(
    name='fictionforge-core',
    version='1.0.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'beautifulsoup4>=4.13.4',
        'chardet>=5.2.0',
        'mammoth>=1.8.0',
        'peewee>=3.18.1',
        'pyyaml>=6.0.2',
        'rich>=14.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=8.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'fictionforge=fictionforge_core.fictionforge_cli:main',
        ],
    },
    author='Emasoft',
    author_email='713559+Emasoft@users.noreply.github.com',
    description='FictionForge Core: manuscript-to-chapter import (EPUB, DOCX, pasted text) and tier-based chapter access gating',
    long_description=open('README.md').read() if Path('README.md').exists() else '',
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Text Processing :: Markup :: HTML',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    python_requires='>=3.10',
)
