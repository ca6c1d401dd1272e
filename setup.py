from setuptools import setup, find_packages

setup(
    name='xgotext',
    version='0.1.dev0',
    description='Extracts translatable strings from source code into '
                'gettext catalogs',
    packages=find_packages(exclude=['tests', 'tests.*']),
    license='BSD',
    python_requires='>=3.8',
    install_requires=['click'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['xgotext = xgotext.__main__:cli'],
    },
)
