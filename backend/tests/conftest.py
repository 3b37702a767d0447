"""
Shared fixtures for VIN lookup backend tests.
"""
import os
import sys

import pytest
import respx

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

HONDA_VIN = "1HGCM82633A004352"


@pytest.fixture
def nhtsa():
    """Intercept all outgoing httpx traffic; tests register the NHTSA routes they need."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def honda_decode_payload():
    """vPIC DecodeVin response (trimmed) for a 2003 Honda Accord."""
    return {
        "Count": 136,
        "Message": "Results returned successfully",
        "SearchCriteria": f"VIN:{HONDA_VIN}",
        "Results": [
            {"Value": "0", "ValueId": "0", "Variable": "Error Code", "VariableId": 143},
            {"Value": "HONDA", "ValueId": "474", "Variable": "Make", "VariableId": 26},
            {"Value": "Accord", "ValueId": "1861", "Variable": "Model", "VariableId": 28},
            {"Value": "2003", "ValueId": "", "Variable": "Model Year", "VariableId": 29},
            {"Value": "Coupe", "ValueId": "3", "Variable": "Body Class", "VariableId": 5},
            {"Value": "6", "ValueId": "", "Variable": "Engine Number of Cylinders", "VariableId": 9},
            {"Value": "3.0", "ValueId": "", "Variable": "Displacement (in Liters)", "VariableId": 13},
            {"Value": "Gasoline", "ValueId": "4", "Variable": "Fuel Type - Primary", "VariableId": 24},
            {"Value": "UNITED STATES (USA)", "ValueId": "6", "Variable": "Plant Country", "VariableId": 75},
            {"Value": None, "ValueId": None, "Variable": "Trim", "VariableId": 38},
        ],
    }


@pytest.fixture
def recall_payload():
    """NHTSA recall API response with a single campaign."""
    return {
        "Count": 1,
        "Message": "Results returned successfully",
        "results": [
            {
                "Manufacturer": "Honda (American Honda Motor Co.)",
                "NHTSACampaignNumber": "04V176000",
                "ReportReceivedDate": "09/04/2004",
                "Component": "AIR BAGS:FRONTAL:DRIVER SIDE:INFLATOR MODULE",
                "Summary": "ON CERTAIN PASSENGER VEHICLES, THE DRIVER'S AIR BAG INFLATOR COULD PRODUCE EXCESSIVE "
                "INTERNAL PRESSURE.",
                "Consequence": "METAL FRAGMENTS COULD STRIKE AND POTENTIALLY INJURE THE VEHICLE OCCUPANTS.",
                "ManufacturerRecallNo": "P81",
                "RecallInitiator": "MFR",
                "ModelYear": "2003",
                "Make": "HONDA",
                "Model": "ACCORD",
            }
        ],
    }
