from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="eth-metrics-exporter",
    version="1.0.0",
    description="Prometheus exporter for Ethereum execution and beacon node sync status",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="eth-metrics-exporter contributors",
    packages=find_packages(exclude=["examples"]),
    install_requires=[
        "requests>=2.25.0",
        "click>=8.0.0",
        "urllib3>=1.26.0",
        "prometheus-client>=0.16.0",
        "PyYAML>=5.4"
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.0.0",
            "black>=21.0.0",
            "flake8>=3.8.0",
            "mypy>=0.800"
        ]
    },
    entry_points={
        'console_scripts': [
            'eth-metrics-exporter=eth_metrics_exporter.cli:cli',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Networking :: Monitoring",
    ],
)
