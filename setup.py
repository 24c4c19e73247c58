# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from setuptools import setup, find_packages

VERSION = (0, 1, 0)
__version__ = '.'.join(map(str, VERSION[0:3]))
__description__ = '''Local HTTP forwarding proxy which injects latency and scripted
    transient failures on chosen endpoints, for testing client applications.'''
__license__ = 'BSD'

if __name__ == '__main__':
    setup(
        name='faultproxy',
        version=__version__,
        description=__description__,
        long_description=open(
            'README.md', 'r', encoding='utf-8').read().strip(),
        long_description_content_type='text/markdown',
        license=__license__,
        python_requires='>=3.8',
        zip_safe=False,
        packages=find_packages(exclude=['tests', 'tests.*']),
        install_requires=[],
        extras_require={
            'testing': open(
                'requirements-testing.txt', 'r').read().strip().split(),
        },
        entry_points={
            'console_scripts': [
                'faultproxy = faultproxy:entry_point'
            ]
        },
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Environment :: Console',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: BSD License',
            'Natural Language :: English',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3 :: Only',
            'Programming Language :: Python :: 3',
            'Topic :: Internet :: Proxy Servers',
            'Topic :: Internet :: WWW/HTTP',
            'Topic :: Software Development :: Testing',
            'Topic :: Utilities',
        ],
        keywords=(
            'http, proxy, fault injection, latency, testing, cors'
        )
    )
