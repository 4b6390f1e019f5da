"""Static command sets used to classify officers.

Command names are matched exactly as they appear in the payroll extracts.
"""

# Strategic Response Group commands: the cohort under study
COHORT_COMMANDS: tuple[str, ...] = (
    "STRATEGIC RESPONSE GROUP",
    "STRATEGIC RESP GRP 1 MANHATTAN",
    "STRATEGIC RESP GRP 2 BRONX",
    "STRATEGIC RESP GRP 3 BROOKLYN",
    "STRATEGIC RESP GRP 4 QUEENS",
    "STRATEGIC RESP GRP 5 SI",
)

# Related but distinct units, used as a secondary comparison group
SPECIALIZED_COMMANDS: tuple[str, ...] = (
    "CITYWIDE COUNTERTERRORISM UNIT",
    "COUNTERTERRORISM BUREAU",
    "COUNTERTERRORISM DIVISION",
    "CRITICAL RESPONSE COMMAND",
    "DISORDER CONTROL UNIT",
    "EMER SERV SQ 01",
    "EMER SERV SQ 02",
    "EMER SERV SQ 03",
    "EMER SERV SQ 04",
    "EMER SERV SQ 05",
    "EMER SERV SQ 06",
    "EMER SERV SQ 07",
    "EMER SERV SQ 08",
    "EMER SERV SQ 09",
    "EMER SERV SQ 10",
    "EMERGENCY SERVICES UNIT",
    "ESU CANINE TEAM",
    "TB ANTI TERRORISM UNIT",
    "TECH. ASSIST. & RESPONSE UNIT",
)
