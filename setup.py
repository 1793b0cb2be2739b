import setuptools

setuptools.setup(
    name="circleci-context",
    version="0.1.0",
    description=(
        "Command Line Interface (CLI) for managing CircleCI contexts and "
        "their environment variables"
    ),
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8,<4",
    install_requires=[
        "splatlog>=0.1.0,<0.2",
        "clavier>=0.1.2",
        "rich",
        "httpx>=0.23",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
    entry_points={
        "console_scripts": [
            "circleci-context=circleci_context:run",
        ],
    },
)
