# vim: set expandtab shiftwidth=4 softtabstop=4:

# === UCSF ChimeraX Copyright ===
# Copyright 2022 Regents of the University of California. All rights reserved.
# This software is provided pursuant to the ChimeraX license agreement, which
# covers academic and commercial uses. For more information, see
# <http://www.rbvi.ucsf.edu/chimerax/docs/licensing.html>
#
# This file is part of the ChimeraX library. You can also redistribute and/or
# modify it under the GNU Lesser General Public License version 2.1 as
# published by the Free Software Foundation. For more details, see
# <https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html>
#
# This file is distributed WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. This notice
# must be embedded in or attached to all copies, including partial copies, of
# the software or any revisions or derivations thereof.
# === UCSF ChimeraX Copyright ===

"""
configfile: Application saved settings support
==============================================

The GUI does not use this module directly;
it uses the :py:mod:`critic2gui.settings` module,
which layers additional capabilities on top of this module's
:py:class:`ConfigFile` class.

This module provides support for accessing persistent
configuration information.  The information is stored in a file in
a human-readable form, *i.e.*, text, but is not necessarily editable.

The configuration information has a semantic version associated with it.
The *MAJOR* part of the version is embedded in the file name, so adding
a property only needs a minor version change.

Property values can either be a Python literal, which is the default value,
or a :py:class:`Value` has three items associated with it:

    1. A default value.
    2. A function that can parse the value.
    3. A function to convert the value to a string.
"""
from .errors import UserError

only_use_defaults = False   # if True, do not read nor write configuration data


class ConfigFile:
    """In-memory handle to persistent configuration information.

    Parameters
    ----------
    session : :py:class:`~critic2gui.session.Session`
        (for ``app_dirs`` and ``logger``)
    tool_name : the name of the tool
    version : configuration file version, optional
        Only the major version part of the version is used.

    Attributes
    ----------
    PROPERTY_INFO : dict of property_name: value
        ``property_name`` must be a legal Python identifier.
        ``value`` is a Python literal or a :py:class:`Value`.
    """

    PROPERTY_INFO = {}

    def __init__(self, session, tool_name, version="1"):
        self._session = session
        self._on_disk = False
        self._tool_name = tool_name
        # affirm that properties don't conflict with methods
        for method in dir(self):
            assert(method not in self.PROPERTY_INFO)
        # convert all property information to Values
        for name, value in self.PROPERTY_INFO.items():
            if not isinstance(value, Value):
                self.PROPERTY_INFO[name] = Value(value)

        import configparser
        self._config = configparser.ConfigParser(
            comment_prefixes=(),
            interpolation=None
        )
        self._filename = None
        if self._use_defaults():
            return

        from packaging.version import Version
        import os
        if not isinstance(version, Version):
            version = Version(version)
        major_version = version.major
        # settings survive minor version changes, so use unversioned app_dirs
        self._filename = os.path.join(
            session.app_dirs.user_config_dir,
            '%s-%s' % (tool_name, major_version))
        if os.path.exists(self._filename):
            self._on_disk = True
            try:
                self._config.read(self._filename, encoding='utf-8')
            except configparser.Error as e:
                session.logger.error('Could not read settings file for %s ("%s"); using default %s settings'
                    % (tool_name, str(e), tool_name))
            # check that all values on disk are valid
            for name in self.PROPERTY_INFO:
                getattr(self, name)

    def _use_defaults(self):
        return only_use_defaults or getattr(self._session, 'app_dirs', None) is None

    def on_disk(self):
        """Return True the configuration information was stored on disk."""
        return self._on_disk

    @property
    def filename(self):
        """The name of the file used to store the settings"""
        return self._filename

    def save(self):
        """Save configuration information to disk.

        Don't store property values that match default value.
        """
        if self._use_defaults():
            raise UserError("Custom configuration is disabled")
        from .safesave import SaveTextFile
        with SaveTextFile(self._filename) as f:
            self._config.write(f)

    def reset(self):
        """Revert all properties to their default state"""
        self._config['DEFAULT'].clear()
        self.save()

    def __getattr__(self, name):
        if name not in self.PROPERTY_INFO:
            raise AttributeError(name)
        if self._use_defaults() or name not in self._config['DEFAULT']:
            value = self.PROPERTY_INFO[name].default
        else:
            try:
                value = self.PROPERTY_INFO[name].convert_from_string(
                    self._config['DEFAULT'][name])
            except (ValueError, SyntaxError) as e:
                self._session.logger.warning(
                    "Invalid %s '%s' attribute value, using default: %s" %
                    (self._tool_name, name, e))
                value = self.PROPERTY_INFO[name].default
        return value

    def __setattr__(self, name, value, call_save=True):
        if name not in self.PROPERTY_INFO:
            if name[0] == '_':
                return object.__setattr__(self, name, value)
            raise AttributeError("Unknown property name: %s" % name)
        if self._use_defaults():
            raise UserError("Custom configuration is disabled")
        if value == self.PROPERTY_INFO[name].default:
            if name not in self._config['DEFAULT']:
                # name is not in ini file and is default, so don't save it
                return
            del self._config['DEFAULT'][name]
        else:
            try:
                str_value = self.PROPERTY_INFO[name].convert_to_string(value)
            except ValueError:
                raise UserError("Illegal %s '%s' attribute value (%s), leaving attribute unchanged"
                    % (self._tool_name, name, repr(value)))
            self._config['DEFAULT'][name] = str_value
        if call_save:
            ConfigFile.save(self)


class Value:
    """Placeholder for default value and conversion functions

    Parameters
    ----------
    default : is the value when the property has not been set.
    from_str : function, optional
        Function that takes a string and returns a value of the right type.
        Defaults to py:func:`ast.literal_eval`.
    to_str : function returning a string, optional
        Defaults to :py:func:`repr`.
    """

    def __init__(self, default, from_str=None, to_str=None):
        self.default = default
        if from_str is None:
            import ast
            self.from_str = ast.literal_eval
        else:
            self.from_str = from_str
        if to_str is None:
            self.to_str = repr
        else:
            self.to_str = to_str

    def convert_from_string(self, str_value):
        return self.from_str(str_value)

    def convert_to_string(self, value):
        str_value = self.to_str(value)
        # confirm that value can be restored from disk,
        # by converting to a string and back
        new_value = self.convert_from_string(str_value)
        if new_value != value:
            raise ValueError('value changed while saving it')
        return str_value
