"""
Scytl Converter tool
"""

from setuptools import setup, find_packages

setup(
    name='Scytl-Converter',
    version='0.1',
    license='BSD-3-Clause',
    description="Scytl election results export converter",
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
    ],
    packages=find_packages(),
    install_requires=[
        'XlsxWriter',
    ],
    entry_points={
        'console_scripts': [
            'scytl-convert=pyscytl.run:main',
        ],
    },
)
