# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'Flask>=2.0',
    'pytest>=6.0',
]

setup(
    name='Dato-Client',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    url='https://www.datocms.com/docs/content-management-api',
    license='MIT',
    description='Client for the DatoCMS site and account APIs',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    python_requires='>=3.8',
    tests_require=tests_require,
    install_requires=[
        'requests>=2.20',
        'jsonschema>=3.0',
        'aniso8601>=0.84',
        'blinker>=1.3',
        'rfc3987',
    ],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'tests': tests_require,
    }
)
