"""Sample endpoint responses for testing the decoders and query methods."""

import json


def sources_without_label():
    return json.dumps({
        "results": {"bindings": [
            {"source": {"type": "uri", "value": "http://x/source/epa-gov"}}
        ]}
    })


def sources_mixed():
    return json.dumps({
        "head": {"vars": ["source", "label"]},
        "results": {"bindings": [
            {"source": {"type": "uri", "value": "http://sparql.tw.rpi.edu/source/epa-gov"},
             "label": {"type": "literal", "value": "EPA"}},
            {"source": {"type": "uri", "value": "http://sparql.tw.rpi.edu/source/usgs-gov"}}
        ]}
    })


def empty_results():
    return json.dumps({
        "head": {"vars": ["source", "label"]},
        "results": {"bindings": []}
    })


def site_counts():
    return json.dumps({
        "head": {"vars": ["type", "count"]},
        "results": {"bindings": [
            {"type": {"type": "uri",
                      "value": "http://escience.rpi.edu/ontology/semanteco/2/0/pollution.owl#MeasurementSite"},
             "count": {"type": "literal", "datatype": "http://www.w3.org/2001/XMLSchema#integer",
                       "value": "12"}},
            {"type": {"type": "uri", "value": "http://example.org/Other"},
             "count": {"type": "literal", "value": "3"}}
        ]}
    })


def measurement_turtle():
    return """
@prefix pol: <http://escience.rpi.edu/ontology/semanteco/2/0/pollution.owl#> .

<http://example.org/measurement/1> pol:hasCounty "001" ;
    pol:hasState "08" ;
    pol:hasValue "0.5" .
"""
