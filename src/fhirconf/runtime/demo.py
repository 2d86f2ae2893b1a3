from __future__ import annotations

from ..core.bindings import (
    IdParameter,
    MethodBinding,
    OperationMethodBinding,
    OperationParameter,
    ReturnType,
    SearchMethodBinding,
    SearchParameter,
)
from ..core.codes import RestOperationType, SearchParamType
from ..core.configuration import ServerConfiguration
from ..core.resources import ResourceCatalog


def demo_configuration() -> ServerConfiguration:
    """A small Patient/Observation server used by `python -m fhirconf`."""

    catalog = ResourceCatalog()
    catalog.define(
        "Patient",
        {
            "family": "A portion of the family name of the patient",
            "birthdate": "The patient's date of birth",
            "organization": "The organization at which this person is a patient",
        },
    )
    catalog.define("Observation", {"code": "The code of the observation type"})

    cfg = ServerConfiguration(
        server_name="fhirconf demo",
        server_version="0.1.0",
        implementation_description="Demo FHIR server",
        catalog=catalog,
    )

    everything = OperationMethodBinding(
        name="$everything",
        resource_name="Patient",
        description="Fetch a patient and everything related to it",
        idempotent=True,
        can_operate_at_instance_level=True,
        rest_operation_type=RestOperationType.EXTENDED_OPERATION_INSTANCE,
        parameters=(
            IdParameter(),
            OperationParameter(name="start", param_type="date"),
            OperationParameter(name="end", param_type="date"),
        ),
        return_params=(ReturnType(name="return", type="Bundle", min=1, max=1),),
    )

    patient = cfg.resource_binding("Patient")
    patient.add(MethodBinding(rest_operation_type=RestOperationType.VREAD, resource_name="Patient"))
    patient.add(
        MethodBinding(rest_operation_type=RestOperationType.CREATE, resource_name="Patient", supports_conditional=True)
    )
    patient.add(
        SearchMethodBinding(
            resource_name="Patient",
            includes=("Patient:organization",),
            parameters=(
                SearchParameter(name="family", param_type=SearchParamType.STRING),
                SearchParameter(name="birthdate", param_type=SearchParamType.DATE),
                SearchParameter(
                    name="organization.name",
                    param_type=SearchParamType.REFERENCE,
                    declared_types=("Organization",),
                ),
            ),
        )
    )
    patient.add(everything)

    observation = cfg.resource_binding("Observation")
    observation.add(MethodBinding(rest_operation_type=RestOperationType.READ, resource_name="Observation"))
    observation.add(
        SearchMethodBinding(
            resource_name="Observation",
            parameters=(SearchParameter(name="code", param_type=SearchParamType.TOKEN, required=True),),
        )
    )

    cfg.server_bindings.append(MethodBinding(rest_operation_type=RestOperationType.TRANSACTION))
    cfg.server_bindings.append(MethodBinding(rest_operation_type=RestOperationType.HISTORY_SYSTEM))
    return cfg
