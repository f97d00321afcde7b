#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

""" Base CLI classes and methods
"""

import argparse
import functools
import inspect
import types
from abc import ABCMeta, abstractmethod

from ..config import InstallConfig
from ..metadata import StaticMetadata


def add_install_config_arg(parser):
    """ Add install config common argument
    """
    parser.add_argument('-c', '--config', required=True,
                        help='Install configuration file')


def add_metadata_arg(parser):
    """ Add region metadata common argument
    """
    parser.add_argument('-m', '--metadata', required=True,
                        help='Region metadata snapshot file')


class UsesInstallConfig:
    """ Decorate a class to provide the install configuration and the
    region metadata provider
    """
    def __init__(self, config=True, metadata=True):
        self.config = config
        self.metadata = metadata

    def __call__(self, wrapped):
        uses_config = self.config
        uses_metadata = self.metadata

        @functools.wraps(getattr(wrapped, '__call__'))
        def new_call(instance, cmd_args, *args, **kwargs):
            cmd_dict = vars(cmd_args)

            if uses_config:
                if 'config' not in cmd_dict:
                    raise AttributeError(
                        f'config not in args for {instance.__class__.__name__}')
                cmd_dict['install_config'] = InstallConfig.load(cmd_dict['config'])

            if uses_metadata:
                if 'metadata' not in cmd_dict:
                    raise AttributeError(
                        f'metadata not in args for {instance.__class__.__name__}')
                cmd_dict['provider'] = StaticMetadata.load(cmd_dict['metadata'])

            return super(instance.__class__, instance).__call__(
                argparse.Namespace(**cmd_dict), *args, **kwargs)

        @functools.wraps(getattr(wrapped, 'build_parser'))
        def new_build_parser(instance, parser):
            if uses_config:
                add_install_config_arg(parser)
            if uses_metadata:
                add_metadata_arg(parser)
            super(instance.__class__, instance).build_parser(parser)

        cls_update = dict(__call__=new_call,
                          build_parser=new_build_parser)

        new_cls = types.new_class(wrapped.__name__,
                                  bases=inspect.getmro(wrapped),
                                  exec_body=lambda x: x.update(cls_update))

        functools.update_wrapper(new_cls, wrapped, updated=())

        return new_cls


class SubCommandBase(metaclass=ABCMeta):
    """ Base class for sub commands
    """
    sub_command = ''

    @abstractmethod
    def build_parser(self, parser):
        """ Add arguments to the parser for this subcommand
        """

    @abstractmethod
    def __call__(self, args):
        """ Run the subcommand with provided arguments
        """


class CLIBase(SubCommandBase):
    """ Base class for command CLIs
    """
    command_classes = ()

    def __init__(self):
        self.sub_commands = dict()

        for cls in self.command_classes:
            sub_command = getattr(cls, 'sub_command', '')
            if sub_command:
                self.sub_commands[sub_command] = cls()

    def build_parser(self, parser):
        sub_parsers = parser.add_subparsers(help='sub commands', required=True,
                                            dest='sub_command')

        for sub_command in sorted(self.sub_commands):
            obj = self.sub_commands[sub_command]
            cmd_parser = sub_parsers.add_parser(sub_command,
                                                help=obj.__doc__)
            if hasattr(obj, 'build_parser'):
                obj.build_parser(cmd_parser)

    def __call__(self, args):
        ret = self.sub_commands[args.sub_command](args)
        return ret[0] if isinstance(ret, tuple) else ret
