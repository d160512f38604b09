from setuptools import find_packages, setup

setup(
    name="abstract-synthesizer",
    version="0.1.0",
    license="Apache License 2.0",

    python_requires=">=3.11",
    description="Vocabulary-checked DSL engine that turns nested calls into "
                "manifests, with a Terraform flavour and AWS resource wrappers.",

    packages=find_packages(include=("abstract_synthesizer", "abstract_synthesizer.*")),
    package_data={"abstract_synthesizer": ["test/fixtures/*/*"]},

    install_requires=[
        "Click>=8.0,<9.0",
        "toml>=0.10.0,<0.11.0",
        "pydantic>=2.0,<3.0",
        "ruamel.yaml>=0.17.21,<0.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
            "anymarkup>=0.7.0,<0.9.0",
        ],
    },

    test_suite="abstract_synthesizer.test",

    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
    ],
    entry_points={
        'console_scripts': [
            'abstract-synthesizer = abstract_synthesizer.cli:root',
        ],
    },
)
