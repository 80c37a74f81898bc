from setuptools import find_packages, setup

setup(
    name='fixcsv',
    version='1.0.0',
    description='Encode typed records as fixed-position, length-bounded delimited lines',
    author='',
    author_email='',
    packages=find_packages(include=['fixcsv', 'fixcsv.*']),
    python_requires='>=3.11',
    install_requires=[
        'msgspec',
        'construct',
        'marshmallow>=3.13',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
    entry_points={
        'console_scripts': [
            'fixcsv=fixcsv.cli:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
