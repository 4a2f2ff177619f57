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
settings: Save/access interface values
======================================

Subclass :py:class:`Settings` and populate the class dictionaries
AUTO_SAVE and EXPLICIT_SAVE with setting names and default values.
AUTO_SAVE settings are written to disk as soon as they are set;
EXPLICIT_SAVE settings only when :py:meth:`Settings.save` is called.

**Example**

::

    class GuiSettings(Settings):
        AUTO_SAVE = {
            'tooltip_delay': 0.5,
        }
        EXPLICIT_SAVE = {
            'key_bindings': {},
        }

    settings = GuiSettings(session, "gui")
    settings.tooltip_delay = 1.0    # auto-saved
    settings.key_bindings = {...}
    settings.save()                 # saves all settings

The setting names have to be legal as attribute names and cannot start
with an underscore.
"""

from .configfile import ConfigFile, Value


class Settings(ConfigFile):
    """Save/remember interface settings

    Parameters
    ----------
    session
        The session object
    tool_name : str
        The name of the tool
    version : str, optional
        The version number for the settings, which should be increased
        if settings are added, deleted, or modified.
    """

    AUTO_SAVE = EXPLICIT_SAVE = {}

    def __init__(self, session, tool_name, version="1"):
        object.__setattr__(self, '_settings_initialized', False)
        self.__class__.PROPERTY_INFO = {}
        self.__class__.PROPERTY_INFO.update(self.__class__.AUTO_SAVE)
        self.__class__.PROPERTY_INFO.update(self.__class__.EXPLICIT_SAVE)
        self._cur_settings = {}
        ConfigFile.__init__(self, session, tool_name, version=version)
        for attr_name in self.__class__.PROPERTY_INFO.keys():
            if attr_name[0] == '_':
                raise ValueError("setting name cannot start with underscore")
            self._cur_settings[attr_name] = ConfigFile.__getattr__(self, attr_name)
        object.__setattr__(self, '_settings_initialized', True)

    def __getattr__(self, name):
        if not self._settings_initialized:
            return ConfigFile.__getattr__(self, name)
        try:
            return self._cur_settings[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        if (self._settings_initialized and name[0] != '_'
                and name in self._cur_settings):
            self._cur_settings[name] = value
            if name in self.__class__.AUTO_SAVE and not self._use_defaults():
                ConfigFile.__setattr__(self, name, value)
        else:
            ConfigFile.__setattr__(self, name, value)

    def save(self):
        for name in self.__class__.EXPLICIT_SAVE.keys():
            ConfigFile.__setattr__(self, name, self._cur_settings[name], call_save=False)
        ConfigFile.save(self)


class GuiSettings(Settings):

    AUTO_SAVE = {
        'tooltip_delay': Value(0.5, float, str),
        'crystal_library': '',
        'molecule_library': '',
        'critic2_executable': '',
    }
    EXPLICIT_SAVE = {
        # bind name -> (key, modifiers)
        'key_bindings': {},
    }
