from setuptools import setup, find_packages

setup(
    name="nftfi-sdk",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "web3>=7.0.0",
        "eth-account>=0.13.0",
        "eth-utils>=4.0.0",
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
    },
    python_requires=">=3.8",
    author="NFTfi Team",
    description="Python client for originating, repaying and liquidating NFTfi loans",
)
