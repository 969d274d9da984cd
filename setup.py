from setuptools import setup, find_packages

setup(
    name="online_stree",
    version="0.1.0",
    description="Online (Ukkonen) suffix tree substring index",
    packages=find_packages(where='.', include=['online_stree', 'online_stree.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        # Optional Graphviz rendering of the tree (OnlineSuffixTree.display_graphviz).
        'viz': ['graphviz'],
        # benchmark.py tabulates its timings with pandas and plots them with matplotlib.
        'bench': ['pandas', 'matplotlib'],
        'test': ['pytest'],
    },
    zip_safe=False
)
