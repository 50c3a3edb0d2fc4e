"""
End-to-end tests for SparqlClient against a mocked HTTP endpoint
(requests-mock): dispatch → classification → decoding.
"""

import json
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
from rdflib import Literal, URIRef

from sparql_client import (
    BindingsResult,
    BlankNodeRegistry,
    BooleanResult,
    ClientError,
    ConfigurationError,
    EndpointConfig,
    GraphResult,
    MalformedQuery,
    OperationKind,
    ServerError,
    SparqlClient,
    TransportError,
    UnsupportedFormat,
)
from sparql_client.settings import RESULT_BOOL, RESULT_JSON, RESULT_XML
from tests.fixtures.endpoint_fixtures import (
    ENDPOINT,
    UPDATE_ENDPOINT,
    flaky_client,
)

SELECT = "SELECT ?x WHERE { ?x ?p ?o }"
ASK = "ASK { ?s ?p ?o }"
UPDATE = "INSERT DATA { <http://ex/s> <http://ex/p> <http://ex/o> }"

BNODE_DOC = json.dumps(
    {"results": {"bindings": [{"b": {"type": "bnode", "value": "b0"}}]}}
)


def json_headers(content_type: str = RESULT_JSON) -> dict:
    return {"Content-Type": content_type}


# ----------------------------------------------------------------------
# Construction
# ----------------------------------------------------------------------


def test_malformed_url_fails_at_construction():
    with pytest.raises(ConfigurationError):
        SparqlClient("definitely not a url")


def test_scheme_less_environment_proxy_does_not_break_construction(monkeypatch):
    monkeypatch.setenv("http_proxy", "proxy.local:3128")
    with SparqlClient(ENDPOINT) as c:
        assert c.config.http_proxy == "http://proxy.local:3128"


def test_config_and_options_are_exclusive():
    cfg = EndpointConfig.build(url=ENDPOINT)
    assert SparqlClient(config=cfg).config is cfg
    with pytest.raises(TypeError):
        SparqlClient(ENDPOINT, config=cfg)
    with pytest.raises(TypeError):
        SparqlClient(config=cfg, method="GET")


def test_from_env(monkeypatch):
    monkeypatch.setenv("SPARQL_ENDPOINT_URL", ENDPOINT)
    with SparqlClient.from_env(method="GET") as c:
        assert c.url == ENDPOINT
        assert c.config.method == "GET"


def test_repr(client):
    assert repr(client) == f"<SparqlClient url='{ENDPOINT}'>"


def test_context_manager_closes_session():
    with SparqlClient(ENDPOINT) as c:
        assert isinstance(c, SparqlClient)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------


def test_select_over_post(client, requests_mock, select_json_text):
    requests_mock.post(ENDPOINT, text=select_json_text, headers=json_headers())
    result = client.query(SELECT)

    assert isinstance(result, BindingsResult)
    assert list(result) == [{"x": URIRef("http://ex/1")}, {"x": Literal("hi", lang="en")}]

    sent = requests_mock.last_request
    assert sent.method == "POST"
    assert parse_qs(sent.text) == {"query": [SELECT]}
    assert sent.headers["Accept"].startswith(f"{RESULT_JSON}, {RESULT_XML}")


def test_select_over_get(get_client, requests_mock, select_xml_text):
    requests_mock.get(ENDPOINT, text=select_xml_text, headers=json_headers(RESULT_XML))
    result = get_client.query(SELECT)

    assert len(result) == 2
    sent = requests_mock.last_request
    assert sent.method == "GET"
    assert parse_qs(urlsplit(sent.url).query) == {"query": [SELECT]}


def test_method_override_per_call(client, requests_mock):
    requests_mock.get(ENDPOINT, text="true", headers=json_headers(RESULT_BOOL))
    assert client.query(ASK, method="GET") == BooleanResult(True)
    assert requests_mock.last_request.method == "GET"


def test_ask_with_plain_text_false(client, requests_mock):
    requests_mock.post(ENDPOINT, text="false", headers=json_headers(RESULT_BOOL))
    result = client.query(ASK)
    assert result == BooleanResult(False)
    assert not result


def test_ask_with_json(client, requests_mock):
    requests_mock.post(ENDPOINT, text='{"head": {}, "boolean": true}', headers=json_headers())
    assert client.query(ASK) == BooleanResult(True)


def test_content_type_override_sets_accept_and_decoder(client, requests_mock, select_json_text):
    requests_mock.post(ENDPOINT, text=select_json_text, headers=json_headers("text/plain"))
    result = client.query(SELECT, content_type=RESULT_JSON)
    assert isinstance(result, BindingsResult)
    assert requests_mock.last_request.headers["Accept"] == RESULT_JSON


def test_content_type_override_does_not_stick(client, requests_mock):
    requests_mock.post(ENDPOINT, text="true", headers=json_headers(RESULT_BOOL))
    client.query(ASK, content_type=RESULT_BOOL)
    client.query(ASK)
    assert requests_mock.last_request.headers["Accept"] == client.config.headers["Accept"]


def test_call_headers_are_sent(client, requests_mock):
    requests_mock.post(ENDPOINT, text="true", headers=json_headers(RESULT_BOOL))
    client.query(ASK, headers={"X-Request-Id": "42"})
    assert requests_mock.last_request.headers["X-Request-Id"] == "42"


def test_construct_returns_graph(client, requests_mock, turtle_text):
    requests_mock.post(ENDPOINT, text=turtle_text, headers=json_headers("text/turtle"))
    result = client.query("CONSTRUCT WHERE { ?s ?p ?o }")
    assert isinstance(result, GraphResult)
    assert len(result) == 2


def test_unsupported_response_format(client, requests_mock):
    requests_mock.post(ENDPOINT, text="<html/>", headers=json_headers("application/x-unknown"))
    with pytest.raises(UnsupportedFormat):
        client.query(SELECT)


def test_response_returns_classified_http_response(client, requests_mock):
    requests_mock.post(ENDPOINT, text="true", headers=json_headers(RESULT_BOOL))
    response = client.response(ASK)
    assert isinstance(response, requests.Response)
    assert client.parse_response(response) == BooleanResult(True)


def test_basic_auth_from_url(requests_mock):
    requests_mock.post("http://sparql.example.org/sparql", text="true", headers=json_headers(RESULT_BOOL))
    with SparqlClient("http://bob:pw@sparql.example.org/sparql") as c:
        c.query(ASK)
    assert requests_mock.last_request.headers["Authorization"].startswith("Basic ")


# ----------------------------------------------------------------------
# Updates
# ----------------------------------------------------------------------


def test_update_goes_to_update_endpoint(client, requests_mock):
    requests_mock.post(UPDATE_ENDPOINT, status_code=204)
    assert client.update(UPDATE) is None
    sent = requests_mock.last_request
    assert sent.url == UPDATE_ENDPOINT
    assert parse_qs(sent.text) == {"query": [UPDATE]}


def test_update_with_custom_parameter(requests_mock):
    requests_mock.post(UPDATE_ENDPOINT, status_code=200)
    with SparqlClient(ENDPOINT, update_url=UPDATE_ENDPOINT, update_parameter="update") as c:
        c.update(UPDATE)
    assert parse_qs(requests_mock.last_request.text) == {"update": [UPDATE]}


def test_update_with_html_acknowledgement_returns_none(client, requests_mock):
    requests_mock.post(
        UPDATE_ENDPOINT, text="<html>Update succeeded</html>", headers=json_headers("text/html")
    )
    assert client.update(UPDATE) is None


def test_update_with_decodable_body(client, requests_mock):
    requests_mock.post(UPDATE_ENDPOINT, text='{"boolean": true}', headers=json_headers())
    assert client.update(UPDATE) == BooleanResult(True)


def test_response_with_update_kind(client, requests_mock):
    requests_mock.post(UPDATE_ENDPOINT, status_code=204)
    assert client.response(UPDATE, kind=OperationKind.UPDATE).status_code == 204


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------


def test_400_raises_malformed_query(client, requests_mock):
    requests_mock.post(ENDPOINT, status_code=400, text="Lexical error at line 1")
    with pytest.raises(MalformedQuery) as excinfo:
        client.query("SELEC nonsense")
    assert excinfo.value.body == "Lexical error at line 1"
    assert requests_mock.call_count == 1


def test_403_raises_client_error(client, requests_mock):
    requests_mock.post(ENDPOINT, status_code=403, text="forbidden")
    with pytest.raises(ClientError) as excinfo:
        client.query(SELECT)
    assert not isinstance(excinfo.value, MalformedQuery)


def test_503_raises_server_error_without_retry(client, requests_mock):
    requests_mock.post(ENDPOINT, status_code=503, text="try later")
    with pytest.raises(ServerError):
        client.query(SELECT)
    assert requests_mock.call_count == 1


def test_update_errors_are_classified(client, requests_mock):
    requests_mock.post(UPDATE_ENDPOINT, status_code=500, text="boom")
    with pytest.raises(ServerError):
        client.update(UPDATE)


def test_transport_failure_raises_transport_error(client, requests_mock):
    requests_mock.post(ENDPOINT, exc=requests.exceptions.ConnectTimeout)
    with pytest.raises(TransportError):
        client.query(SELECT)


def test_connection_resets_are_retried_transparently():
    reset = requests.exceptions.ConnectionError(
        ConnectionResetError(104, "Connection reset by peer")
    )
    c = flaky_client([reset, reset], body=b"true", content_type=RESULT_BOOL)
    assert c.query(ASK) == BooleanResult(True)
    assert len(c._dispatcher.session.sent) == 3


def test_connection_resets_give_up_after_three_attempts():
    reset = requests.exceptions.ConnectionError(
        ConnectionResetError(104, "Connection reset by peer")
    )
    c = flaky_client([reset] * 5, method="GET")
    with pytest.raises(TransportError) as excinfo:
        c.query(ASK)
    assert excinfo.value.attempts == 3
    assert len(c._dispatcher.session.sent) == 3


# ----------------------------------------------------------------------
# Blank-node identity
# ----------------------------------------------------------------------


def test_blank_nodes_persist_across_queries(client, requests_mock):
    requests_mock.post(ENDPOINT, text=BNODE_DOC, headers=json_headers())
    first = client.query(SELECT)[0]["b"]
    second = client.query(SELECT)[0]["b"]
    assert first is second
    assert "b0" in client.nodes


def test_clear_nodes_resets_identity(client, requests_mock):
    requests_mock.post(ENDPOINT, text=BNODE_DOC, headers=json_headers())
    first = client.query(SELECT)[0]["b"]
    client.clear_nodes()
    assert len(client.nodes) == 0
    assert client.query(SELECT)[0]["b"] is not first


def test_per_call_registry_scopes_identity(client, requests_mock):
    requests_mock.post(ENDPOINT, text=BNODE_DOC, headers=json_headers())
    shared = client.query(SELECT)[0]["b"]
    scoped_nodes = BlankNodeRegistry()
    scoped = client.query(SELECT, nodes=scoped_nodes)[0]["b"]
    assert scoped is not shared
    assert scoped_nodes.get("b0") is scoped
    assert client.nodes.get("b0") is shared


def test_separate_clients_have_separate_registries(requests_mock):
    requests_mock.post(ENDPOINT, text=BNODE_DOC, headers=json_headers())
    with SparqlClient(ENDPOINT) as a, SparqlClient(ENDPOINT) as b:
        assert a.query(SELECT)[0]["b"] is not b.query(SELECT)[0]["b"]
