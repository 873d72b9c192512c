"""Setup script for RegionNav package."""

from setuptools import find_packages, setup

setup(
    name='regionnav',
    version='0.1.0',
    author='RegionNav Team',
    author_email='example@example.com',
    description='Hierarchical motion planning over portal and platform linked level regions',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    url='https://github.com/example/regionnav',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={
        'regionnav.config': ['*.yaml'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pydantic>=2',
        'pyyaml',
    ],
    extras_require={
        'dev': [
            'pytest',
            'flake8',
            'black',
        ],
    },
)
