"""Namespaces and graph URIs shared by the data provider modules."""

POL_NS = "http://escience.rpi.edu/ontology/semanteco/2/0/pollution.owl#"
WATER_NS = "http://escience.rpi.edu/ontology/semanteco/2/0/water.owl#"
AIR_NS = "http://was.tw.rpi.edu/ontology/semanteco/air/air.owl#"
DC_NS = "http://purl.org/dc/terms/"
UNIT_NS = "http://sweet.jpl.nasa.gov/2.1/reprSciUnits.owl#"

SEMANTECO_METADATA = "http://sparql.tw.rpi.edu/semanteco/data-source"
AIR_MEASUREMENT_GRAPH = "http://was.tw.rpi.edu/air-measurement-data"
WATER_MEASUREMENT_GRAPH = "http://was.tw.rpi.edu/water-measurement-data"

SITE_VAR = "site"
SOURCE_VAR = "source"
LABEL_VAR = "label"

SPARQL_JSON = "application/sparql-results+json"
TURTLE = "text/turtle"
