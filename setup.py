from setuptools import find_packages, setup

with open("./README.md", encoding='utf-8') as in_:
    setup(
        name='xlsxwriter-cellstream',
        version='0.1.0',
        packages=find_packages(where='src'),
        package_dir={
            "": "src"
        },
        license='MIT',
        description='A stream-style wrapper around XlsxWriter that writes values at a moving cursor, '
                    'with helpers to read sheets back through openpyxl.',
        long_description=in_.read(),
        long_description_content_type="text/markdown",
        python_requires='>=3.7',
        install_requires=[
            "attrs",
            "xlsxwriter",
            "openpyxl",
            "typer",
        ],
        extras_require={
            'testing': ['pytest', 'pytest-mock']
        },
        entry_points={
            'console_scripts': [
                'xlsx-cellstream = xlsxwriter_cellstream.__main__:app',
            ],
        },
    )
