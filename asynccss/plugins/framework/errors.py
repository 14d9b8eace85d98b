# -*- coding: utf-8 -*-
"""Location: ./asynccss/plugins/framework/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin exceptions.
Errors raised by the plugin layer and the helper that turns an
arbitrary exception into a serializable error model.
"""

# First-Party
from asynccss.plugins.framework.models import PluginErrorModel


class PluginError(Exception):
    """A plugin error object for errors internal to the plugin.

    Attributes:
        error (PluginErrorModel): the plugin error object.
    """

    def __init__(self, error: PluginErrorModel):
        """Initialize a plugin error.

        Args:
            error: the plugin error details.

        Examples:
            >>> from asynccss.plugins.framework.errors import PluginError
            >>> from asynccss.plugins.framework.models import PluginErrorModel
            >>> pe = PluginError(PluginErrorModel(message="boom", plugin_name="p1"))
            >>> (str(pe), pe.error.plugin_name)
            ('boom', 'p1')
        """
        self.error = error
        super().__init__(self.error.message)


def convert_exception_to_error(exception: Exception, plugin_name: str) -> PluginErrorModel:
    """Converts an exception object into a PluginErrorModel.

    Args:
        exception: The exception to be converted.
        plugin_name: The name of the plugin on which the exception occurred.

    Returns:
        A plugin error pydantic object.

    Examples:
        >>> from asynccss.plugins.framework.errors import convert_exception_to_error
        >>> err = convert_exception_to_error(ValueError("nope"), plugin_name="p1")
        >>> (err.plugin_name, "ValueError('nope')" in err.message)
        ('p1', True)
    """
    return PluginErrorModel(message=repr(exception), plugin_name=plugin_name)
