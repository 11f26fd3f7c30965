"""fluent_elastic: fluent query and aggregation builder module."""

from setuptools import find_namespace_packages, setup

with open("README.md") as f:
    desc = f.read()

install_requires = [
    "attrs>=23.2.0",
    "orjson>=3.9.0",
    "pydantic>=2.4.1,<3.0.0",
    "pydantic-settings>=2.0.0",
]

extra_reqs = {
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "pre-commit>=3.0.0",
    ],
}

setup(
    name="fluent_elastic",
    version="0.1.0",
    description="Fluent query and aggregation builder for Elasticsearch and OpenSearch.",
    long_description=desc,
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    classifiers=[
        "Intended Audience :: Developers",
        "Intended Audience :: Information Technology",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "License :: OSI Approved :: MIT License",
    ],
    license="MIT",
    packages=find_namespace_packages(include=["fluent_elastic", "fluent_elastic.*"]),
    zip_safe=False,
    install_requires=install_requires,
    tests_require=extra_reqs["dev"],
    extras_require=extra_reqs,
)
