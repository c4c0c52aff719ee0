from setuptools import setup, find_packages

setup(
    name="distmesh2d",
    version="0.1.0",
    description="Triangle mesh generation for signed distance regions by force relaxation",
    author="distmesh2d developers",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.8",
        "meshio>=5.0",
    ],
    extras_require={
        "dev": ["pytest>=6.0"],
    },
)
