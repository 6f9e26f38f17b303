from setuptools import setup, find_namespace_packages

setup(
    name="i2p",
    version="0.1.0",
    packages=find_namespace_packages(where="src", include=["i2p", "i2p.*"]),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "click>=8.0,<8.2",
        "python-dotenv>=1.0",
        "jinja2>=3.0",
        "docker>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "i2p=i2p.CLI.main:main",
        ],
    },
)
