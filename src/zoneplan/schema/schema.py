#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Schemas for the install configuration and metadata snapshot documents
"""

import json
from abc import ABCMeta, abstractmethod
from importlib import resources

import jsonschema
import yaml

from .jstypes import JSIPNetwork, JSZoneName
from ..common.errors import InvalidConfig


def _build_checker(ref):
    def _checker(value):
        try:
            ref(value)
            return True
        except Exception: # pylint: disable=broad-except
            pass

        return False

    return _checker


class _ManagedJsonSchemaBase(metaclass=ABCMeta):
    """ ABC for documents with an associated schema

    Subclasses must call this classes __init__
    """

    @property
    @abstractmethod
    def schema_filename(self) -> str:
        """ Return the schema filename to load from the data directory
        """

    @property
    @abstractmethod
    def document_name(self) -> str:
        """ Return the document name used in error messages
        """

    def __init__(self):
        schema_buf = resources.files(__package__).joinpath("data").joinpath(self.schema_filename).read_text()
        self.schema = json.loads(schema_buf)

        self.format_checker = jsonschema.FormatChecker()
        self.format_checker.checks("ip_network")(_build_checker(JSIPNetwork))
        self.format_checker.checks("zone_name")(_build_checker(JSZoneName))

        self.validator = jsonschema.validators.Draft4Validator(
            schema=self.schema, format_checker=self.format_checker)

    def validate(self, data_obj):
        """ Validate the provided object against this schema
        """
        try:
            self.validator.validate(data_obj)
        except jsonschema.ValidationError as e:
            location = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise InvalidConfig(f"invalid {self.document_name} at {location}: {e.message}") from e

    def load(self, data_filename):
        """ Load the YAML (or JSON) document and validate against this schema
        """
        with open(data_filename) as input_data:
            data_obj = yaml.safe_load(input_data)

        if data_obj is None:
            data_obj = {}
        self.validate(data_obj)

        return data_obj


class InstallConfigSchema(_ManagedJsonSchemaBase):
    """ Schema for the install configuration
    """
    schema_filename = "install_config_schema.json"
    document_name = "install config"


class MetadataSchema(_ManagedJsonSchemaBase):
    """ Schema for a region metadata snapshot
    """
    schema_filename = "metadata_schema.json"
    document_name = "metadata"
