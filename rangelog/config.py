#
# Copyright (c) 2021 Bahtiar `kalkin-` Gadimov.
#
# This file is part of Range Log.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <http://www.gnu.org/licenses/>.
#
''' User configuration read from ``$XDG_CONFIG_HOME/rangelog/config`` '''
import configparser
import logging
import os
from typing import Optional

from xdg_base_dirs import xdg_config_home

LOG = logging.getLogger('rangelog')

MAX_COMMITS = 250


def config_path() -> str:
    return os.path.join(xdg_config_home(), 'rangelog', 'config')


def load_config(path: Optional[str] = None) -> configparser.ConfigParser:
    ''' Return the built-in defaults overridden by the config file '''
    path = path or config_path()
    conf = configparser.ConfigParser()
    conf['repositories'] = {
        'base_path': '',
    }
    conf['log'] = {
        'max_count': MAX_COMMITS,
        'format': 'text',
    }
    conf['date'] = {
        'format': 'rfc',
        'locale': 'en_US',
    }
    try:
        if conf.read(path, encoding='utf-8'):
            LOG.debug('Read configuration from %s', path)
    except configparser.Error as exc:
        LOG.warning('Failed to parse %s: %s', path, exc)
    return conf


CONFIG = load_config()
