import time

import fhirconf
from fhirconf import (
    MethodBinding,
    OperationMethodBinding,
    OperationParameter,
    RestOperationType,
    ReturnType,
    SearchMethodBinding,
    SearchParameter,
    SearchParamType,
    ServerConfiguration,
)


def build_configuration() -> ServerConfiguration:
    cfg = ServerConfiguration(server_name="hello-fhirconf", server_version="1.0")
    cfg.catalog.define("Patient", {"name": "A portion of either family or given name of the patient"})

    patient = cfg.resource_binding("Patient")
    patient.add(MethodBinding(rest_operation_type=RestOperationType.READ))
    patient.add(MethodBinding(rest_operation_type=RestOperationType.UPDATE, supports_conditional=True))
    patient.add(SearchMethodBinding(parameters=[SearchParameter(name="name", param_type=SearchParamType.STRING)]))
    patient.add(
        OperationMethodBinding(
            name="$summary",
            resource_name="Patient",
            idempotent=True,
            can_operate_at_instance_level=True,
            parameters=[OperationParameter(name="since", param_type="date")],
            return_params=[ReturnType(name="return", type="Bundle", min=1)],
        )
    )
    return cfg


def main() -> None:
    server = fhirconf.run(build_configuration(), port=8000)
    print(f"Conformance statement: {server.url}metadata")
    print(f"Operation definition:  {server.url}OperationDefinition/summary")

    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
