from glob import glob
from setuptools import setup


setup(
    name='bigcalc',
    use_scm_version={
        # Source tarballs and plain checkouts carry no tags
        'fallback_version': '0.1.0',
    },
    description='Arbitrary precision multi-radix calculator',
    install_requires=[
        'mpmath',
        'regex',
        'prompt_toolkit',
    ],
    packages=['bigcalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'mypy',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
