from setuptools import setup, find_packages
with open("readme.md", "r") as fh:
    long_description = fh.read()

setup(
    name='scapds',
    version='0.1.0',
    author='scapds contributors',
    description='Decompose SCAP source data-stream collections into standalone component files, and compose them back.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['scapds', 'scapds.*']),
    python_requires='>=3.8',
    install_requires=[
        "lxml",
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: GNU Lesser General Public License v2 or later (LGPLv2+)',
        'Programming Language :: Python :: 3',
        'Topic :: Security',
        'Topic :: Text Processing :: Markup :: XML',
    ],
)
