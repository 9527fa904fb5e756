# Copyright (c) 2019-2020 SAP SE or an SAP affiliate company. All rights reserved. This file is
# licensed under the Apache Software License, v. 2 except as noted otherwise in the LICENSE file
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import sys
import typing

import yaml


def parse_yaml_file(path, max_elements_count=100000):
    '''
    Parses the YAML document at the given path using yaml.SafeLoader.

    @raises ValueError if the document contains more than `max_elements_count` elements
    '''
    with open(path) as f:
        parsed = yaml.load(f, Loader=yaml.SafeLoader)
        # mitigate yaml bomb
        _count_elements(parsed, max_elements_count=max_elements_count)
        return parsed


def _count_elements(value, count=0, max_elements_count=100000):
    '''
    recursively counts elements contained in the given value. Before each recursion step,
    the amount of encountered elements is checked against a maximum allowed elements count.
    If said threshold is exceeded, recursion is aborted and a `ValueError` is raised.

    This function is intended to be used as a mitigation against "Billion laughs attack"
    (https://en.wikipedia.org/wiki/Billion_laughs_attack).

    @param value: typically a dict or a list. Other types will yield a count of 1
    '''
    if count > max_elements_count:
        raise ValueError('dict too large')

    if isinstance(value, dict):
        value = value.values()
    elif not isinstance(value, list):
        return 1

    leng = 0
    for element in value:
        leng += _count_elements(
            element,
            count=count+leng,
            max_elements_count=max_elements_count,
        )

    return leng


def open_outfile(outfile: str) -> typing.TextIO:
    '''
    returns sys.stdout for `-`, otherwise the given file opened for writing
    '''
    if outfile == '-':
        return sys.stdout
    return open(outfile, 'w')
