from setuptools import setup, find_packages

setup(
    name="object-validator",
    version="0.1.0",
    description="Declarative validation of plain nested objects with per-field rules",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'object_validator': ['default-messages.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
