from setuptools import find_packages, setup

"""
# Usage instructions
#
# To install the package
#   'pip install .'
#
# To install for development, with the test dependencies
#   'pip install -e ".[test]"'
#
# To run the example benchmarks
#   'python benchmarks/bench_builtins.py -t -e -r 3'
"""

INSTALL_REQUIRES = [
    "numpy>=1.26",
    "numba>=0.59",
    "msgspec>=0.18",
]

TEST_REQUIRES = [
    "pytest>=8.0",
]


setup(
    name="tickbench",
    version="0.1.0",
    description="Calibrated, outlier-aware microbenchmarking with empty-loop correction",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=INSTALL_REQUIRES,
    extras_require={"test": TEST_REQUIRES},
)
