import setuptools

# Extras may refer to each other as '[extra]'; expand them in place.
EXTRAS = {
    'test': ['pytest', 'hypothesis'],
    'develop': ['[test]', 'pylint'],
}


def lookup_extras(requirement, extras):
    if not requirement.startswith('['):
        return [requirement]
    extra = requirement.strip('[]')
    requirements = []
    for requirement in extras[extra]:
        requirements += lookup_extras(requirement, extras)
    return requirements


def expand_extras(extras):
    expanded = {}
    for extra, requirements in extras.items():
        new_requirements = []
        for requirement in requirements:
            new_requirements += lookup_extras(requirement, extras)
        expanded[extra] = new_requirements
    return expanded


setuptools.setup(
    name='amqtopo',
    version='0.1.0',
    description='AMQP 0-9-1 exchange topology management over '
                'an existing channel',
    author='amqtopo contributors',
    license='MIT',
    packages=['amqtopo'],
    python_requires='>=3.6',
    install_requires=[
        'attrs>=19.1',
        'transitions',
    ],
    extras_require=expand_extras(EXTRAS),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Networking',
    ],
)
