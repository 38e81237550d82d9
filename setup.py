from setuptools import setup, find_packages
import os

here = os.path.abspath(os.path.dirname(__file__))
readme_path = os.path.join(here, 'README.md')
long_description = open(readme_path).read() if os.path.exists(readme_path) else ''

setup(
    name='semanteco',
    version='1.0.0',
    author='SemantEco Developers',
    description='SemantEco modular SPARQL query composition',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=["semanteco", "semanteco.*"]),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'semanteco=semanteco.cmd.semanteco_cmd:main',
        ],
    },

    license='Apache License 2.0',
    install_requires=[
        "python-dotenv",
        "rdflib>=7.0.0",
        "requests",
        "pydantic>=2.0",
        "PyYAML",
        'tabulate'
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
)
