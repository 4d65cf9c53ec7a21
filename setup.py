#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'lightroom2aftershot', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'\"")


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='lightroom2aftershot',
    version=get_version(),
    description='Convert Lightroom presets to AfterShot presets',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
    ],
    keywords='lightroom aftershot bibble xmp preset',
    license='MIT License',
    package_dir={'': 'src'},
    packages=[
        'lightroom2aftershot',
        'lightroom2aftershot.core',
    ],
    python_requires='>=3.10',
    install_requires=[
        'numpy',
    ],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'lightroom2aftershot=lightroom2aftershot.__main__:main'
        ]
    },
    )
