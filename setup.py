from setuptools import find_packages, setup

# Retrieve description from README.md
with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="somgrid",
    version="0.1.0",
    license="MIT",
    description="A PyTorch based Self-Organizing Map engine with cell mapping and majority labels",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(),
    install_requires=[
        "torch",
        "numpy",
        "pandas",
        "fastprogress",
    ],
    extras_require={
        "test": ["nose2"],
    },
    python_requires=">=3.7",
    keywords=["self-organizing-map", "kohonen", "pytorch", "python"],
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
)
