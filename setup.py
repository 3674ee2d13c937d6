import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="hybridmixedlayer",
    version="0.0.1",
    author="Brandon Reichl",
    author_email="brandon.reichl@noaa",
    description="Mixed layer depth of ocean profiles following Holte and Talley (2009).",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    packages=['hybridmixedlayer'],
    python_requires=">=3.6",
    install_requires=[
        'numpy',
        'gsw'
    ],
    extras_require={
        'test': ['pytest'],
    },
)
