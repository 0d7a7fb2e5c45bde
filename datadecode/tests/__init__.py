#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Test cases and infrastructure for the decoder.

Test Modules
------------

Decoder Tests:
    test_value_decoder
        Value types from byte pools, array chunking

    test_memory_decoder
        Memory strings, arrays and structs (member relocation)

    test_storage_decoder
        Inline and out-of-line storage strings, dynamic arrays, absent slots

    test_dispatcher
        Routing, location mismatches, unrecognized types at every level

Model Tests:
    test_regions
        Memory and storage region reads

    test_type_model
        Type identifier parsing, rendering and relocation

Surface Tests:
    test_snapshot
        YAML snapshot loading

    test_cli
        ``datadecode`` command line

Infrastructure:
    state_builder
        StateBuilder for laying out values in regions the way a compiler would

Running Tests
-------------
From the repository root::

    pytest
    pytest datadecode/tests/test_storage_decoder.py
"""
