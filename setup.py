from setuptools import setup

DESCRIPTION = 'Dense N-dimensional arrays indexed by labels ' \
              'along every axis, for Python.'

with open('README.md') as f:
    LONG_DESCRIPTION = f.read()

dependencies = [
    'numpy>=1.24',
    'donfig>=0.8',
]

setup(
    name='axisarray',
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    use_scm_version={
        'version_scheme': 'guess-next-dev',
        'local_scheme': 'dirty-tag',
        'write_to': 'axisarray/version.py',
        'fallback_version': '0.1.0',
    },
    setup_requires=[
        'setuptools>=38.6.0',
        'setuptools-scm>=6.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
    python_requires='>=3.10, <4',
    install_requires=dependencies,
    package_dir={'': '.'},
    packages=['axisarray', 'axisarray.tests'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    license='MIT',
)
