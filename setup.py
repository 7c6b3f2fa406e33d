# coding: utf-8
import os
import re
from setuptools import setup

HERE = os.path.dirname(__file__)
README = open(os.path.join(HERE, 'PYPIREADME.rst')).read()
REQUIREMENTS = [
    line.strip() for line in open(os.path.join(HERE,
                                               'requirements.txt')).readlines()]
TEST_REQUIREMENTS = [
    line.strip() for line in open(os.path.join(HERE,
                                               'test-requirements.txt')).readlines()]
VERSION = re.search(
    r"__version__ = '([^']+)'",
    open(os.path.join(HERE, 'paypalnvp', '__init__.py')).read()).group(1)

setup(
    name='paypalnvp',
    version=VERSION,
    packages=['paypalnvp'],
    include_package_data=True,
    license='MIT',
    description='PayPal NVP API client library',
    long_description=README,
    keywords=['api', 'paypal', 'nvp', 'express checkout', 'payments', 'client'],
    install_requires=REQUIREMENTS,
    extras_require={'test': TEST_REQUIREMENTS},
    python_requires='>=3.7',
    classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: MIT License',
          'Operating System :: OS Independent',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python',
          'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
