"""
Built-in sample catalog, installed whenever a field catalog fails to load.

Records use the on-disk catalog field names.
"""

SAMPLE_DATA = (
    {
        "name": "Sample Star 1",
        "ra": 13.0,
        "dec": 27.8,
        "mag": 10.5,
        "bv": 0.6,
        "ub": 0.1,
        "redshift": 0.0,
        "objType": 0,
        "code": 50505000,
        "specType": "G5 V",
    },
    {
        "name": "Sample Galaxy 1",
        "ra": 13.02,
        "dec": 27.75,
        "mag": 12.3,
        "bv": 1.0,
        "ub": 0.6,
        "redshift": 0.024,
        "objType": 1,
        "code": 10,
        "specType": "",
    },
    {
        "name": "Sample Star 2",
        "ra": 12.98,
        "dec": 27.85,
        "mag": 11.2,
        "bv": 0.3,
        "ub": 0.05,
        "redshift": 0.0,
        "objType": 0,
        "code": 40505000,
        "specType": "F5 V",
    },
)
