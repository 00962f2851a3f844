from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="taskdate",
    version="0.1.0",
    author="Peter Cotton",
    author_email="",
    description="Taskwarrior-style date expression parser",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/petercotton/taskdate",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'taskdate': ['config.yaml'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "python-dateutil>=2.8.0",
        "isoweek>=1.3.0",
        "rapidfuzz>=2.0.0",
        "PyYAML>=5.4",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
)
