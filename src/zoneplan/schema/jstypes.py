#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
JS object types used by the format checkers
"""

import ipaddress


class JSIPNetwork(ipaddress.IPv4Network):
    """ Manage an IP Network object

    Host bits must be clear, "10.0.0.1/16" is rejected.
    """


class JSZoneName(str):
    """ A zone name, lowercase letters, digits and dashes ending in a letter
    or digit, e.g. us-east-1a or us-east-1-nyc-1a
    """
    def __new__(cls, value):
        value = str(value)
        if not value or not value[-1].isalnum() or value[0] == '-':
            raise ValueError(f'invalid zone name: {value!r}')
        if any(not (c.isdigit() or c == '-' or (c.isalpha() and c.islower())) for c in value):
            raise ValueError(f'invalid zone name: {value!r}')
        return super().__new__(cls, value)
