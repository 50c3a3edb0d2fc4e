import json

import pytest

SELECT_JSON = {
    "head": {"vars": ["x"]},
    "results": {
        "bindings": [
            {"x": {"type": "uri", "value": "http://ex/1"}},
            {"x": {"type": "literal", "value": "hi", "xml:lang": "en"}},
        ]
    },
}

SELECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<sparql xmlns="http://www.w3.org/2005/sparql-results#">
  <head><variable name="x"/></head>
  <results>
    <result>
      <binding name="x"><uri>http://ex/1</uri></binding>
    </result>
    <result>
      <binding name="x"><literal xml:lang="en">hi</literal></binding>
    </result>
  </results>
</sparql>
"""

MIXED_JSON = {
    "head": {"vars": ["s", "n", "age", "who"]},
    "results": {
        "bindings": [
            {
                "s": {"type": "bnode", "value": "b0"},
                "n": {"type": "literal", "value": "Alice"},
                "age": {
                    "type": "typed-literal",
                    "value": "42",
                    "datatype": "http://www.w3.org/2001/XMLSchema#integer",
                },
                "who": {"type": "uri", "value": "http://ex/alice"},
            },
            {
                "s": {"type": "bnode", "value": "b1"},
                "who": {"type": "bnode", "value": "b0"},
            },
        ]
    },
}

MIXED_XML = """<?xml version="1.0"?>
<sparql xmlns="http://www.w3.org/2005/sparql-results#">
  <head>
    <variable name="s"/><variable name="n"/>
    <variable name="age"/><variable name="who"/>
  </head>
  <results>
    <result>
      <binding name="s"><bnode>b0</bnode></binding>
      <binding name="n"><literal>Alice</literal></binding>
      <binding name="age">
        <literal datatype="http://www.w3.org/2001/XMLSchema#integer">42</literal>
      </binding>
      <binding name="who"><uri>http://ex/alice</uri></binding>
    </result>
    <result>
      <binding name="s"><bnode>b1</bnode></binding>
      <binding name="who"><bnode>b0</bnode></binding>
    </result>
  </results>
</sparql>
"""

TURTLE = """@prefix ex: <http://ex/> .
ex:alice ex:knows ex:bob .
ex:bob ex:name "Bob"@en .
"""


@pytest.fixture
def select_json_text() -> str:
    return json.dumps(SELECT_JSON)


@pytest.fixture
def select_xml_text() -> str:
    return SELECT_XML


@pytest.fixture
def mixed_json_text() -> str:
    return json.dumps(MIXED_JSON)


@pytest.fixture
def mixed_xml_text() -> str:
    return MIXED_XML


@pytest.fixture
def turtle_text() -> str:
    return TURTLE
