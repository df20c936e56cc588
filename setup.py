import setuptools

import histdump.version

with open("README.md", "r") as readme:
    long_description = readme.read()

setuptools.setup(
    name='histdump',
    version=histdump.version.VERSION,
    description='Dump, clear, and archive bash history in Markdown format',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages('.', include=['histdump', 'histdump.*']),
    scripts=['bin/histdump'],
    install_requires=[
        'prompt_toolkit',
        'psutil',
    ],
    extras_require={
        'test': [
            'dill',
            'pytest',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX :: Linux'
    ],
    python_requires='>=3.9'
)
