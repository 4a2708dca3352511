from setuptools import setup, find_packages

setup(
    name="buddys-treehouse",
    version="0.1.0",
    description="Buddy's Treehouse - virtual pet simulation core with needs, mood and progression",
    author="Your Name",
    packages=find_packages(include=["treehouse", "treehouse.*"]),
    include_package_data=True,
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "treehouse = treehouse.app.cli:main",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
