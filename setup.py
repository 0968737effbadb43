from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="buffered-events",
    version="0.1.0",
    description="In-process event emitter with transactional event buffers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["buffered_events*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.3",
        "python-dotenv>=1.0.1",
        "colorlog>=6.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
