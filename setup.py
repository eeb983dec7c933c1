from setuptools import find_packages, setup


def parse_requirements(filename):
    with open(filename) as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="pyimgconv",
    version="0.1.0",
    description="Local image format conversion between PNG, JPEG, WebP and SVG.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",

    packages=find_packages(include=["pyimgconv", "pyimgconv.*"]),
    install_requires=parse_requirements("requirements.txt"),
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.10",
    include_package_data=True,
    package_data={
        "pyimgconv": ["configs/*.yaml"]
    },
)
