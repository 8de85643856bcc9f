import setuptools
from setuptools import find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

version = {}
with open("networkable_sdk/version.py", "r", encoding="utf-8") as fh:
    exec(fh.read(), version)


def read_requirements(path):
    if not isinstance(path, list):
        path = [path]
    requirements = []
    for p in path:
        with open(p) as fh:
            requirements.extend(
                [line.strip() for line in fh if line.strip() and not line.startswith("#")]
            )
    return requirements


setuptools.setup(
    name="networkable-sdk",
    version=version["__version__"],
    description="Convenience layer giving controllers GET/PUT/POST helpers, JSON model decoding and image fetching on a shared HTTP session.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(
        where=".",
        include=("networkable_sdk", "networkable_sdk.*"),
    ),
    install_requires=read_requirements(["requirements/requirements.sdk.http.txt"]),
    extras_require={
        "test": read_requirements(["requirements/requirements.test.unit.txt"]),
    },
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
