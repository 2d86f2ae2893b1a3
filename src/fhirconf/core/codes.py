from __future__ import annotations

from enum import Enum

FHIR_VERSION = "1.0.2"

CT_FHIR_XML = "application/xml+fhir"
CT_FHIR_JSON = "application/json+fhir"


class _CodedEnum(str, Enum):
    @classmethod
    def from_code(cls, code: str | None):
        """Return the member for `code`, or None if the code is not part of this value set."""
        if code is None:
            return None
        for member in cls:
            if member.value == code:
                return member
        return None

    @property
    def code(self) -> str:
        return self.value


class RestOperationType(Enum):
    """Operation kind a method binding was registered for.

    Unlike the FHIR value sets below, a few kinds carry no code at all (paging).
    """

    READ = "read"
    VREAD = "vread"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"
    HISTORY_INSTANCE = "history-instance"
    HISTORY_TYPE = "history-type"
    HISTORY_SYSTEM = "history-system"
    CREATE = "create"
    SEARCH_TYPE = "search-type"
    SEARCH_SYSTEM = "search-system"
    TRANSACTION = "transaction"
    VALIDATE = "validate"
    METADATA = "metadata"
    META = "$meta"
    META_ADD = "$meta-add"
    META_DELETE = "$meta-delete"
    EXTENDED_OPERATION_SERVER = "extended-operation-server"
    EXTENDED_OPERATION_TYPE = "extended-operation-type"
    EXTENDED_OPERATION_INSTANCE = "extended-operation-instance"
    GET_PAGE = None

    @property
    def code(self) -> str | None:
        return self.value


class TypeRestfulInteraction(_CodedEnum):
    # Declaration order is the order interactions are listed in a statement.
    READ = "read"
    VREAD = "vread"
    UPDATE = "update"
    DELETE = "delete"
    HISTORY_INSTANCE = "history-instance"
    VALIDATE = "validate"
    HISTORY_TYPE = "history-type"
    CREATE = "create"
    SEARCH_TYPE = "search-type"

    @property
    def ordinal(self) -> int:
        return list(type(self)).index(self)


class SystemRestfulInteraction(_CodedEnum):
    TRANSACTION = "transaction"
    SEARCH_SYSTEM = "search-system"
    HISTORY_SYSTEM = "history-system"


class ConditionalDeleteStatus(_CodedEnum):
    NOT_SUPPORTED = "not-supported"
    SINGLE = "single"
    MULTIPLE = "multiple"


class SearchParamType(_CodedEnum):
    NUMBER = "number"
    DATE = "date"
    STRING = "string"
    TOKEN = "token"
    REFERENCE = "reference"
    COMPOSITE = "composite"
    QUANTITY = "quantity"
    URI = "uri"


class OperationParameterUse(_CodedEnum):
    IN = "in"
    OUT = "out"


RESOURCE_TYPES: frozenset[str] = frozenset(
    {
        "Account",
        "AllergyIntolerance",
        "Appointment",
        "AppointmentResponse",
        "AuditEvent",
        "Basic",
        "Binary",
        "BodySite",
        "Bundle",
        "CarePlan",
        "Claim",
        "ClaimResponse",
        "ClinicalImpression",
        "Communication",
        "CommunicationRequest",
        "Composition",
        "ConceptMap",
        "Condition",
        "Conformance",
        "Contract",
        "Coverage",
        "DataElement",
        "DetectedIssue",
        "Device",
        "DeviceComponent",
        "DeviceMetric",
        "DeviceUseRequest",
        "DeviceUseStatement",
        "DiagnosticOrder",
        "DiagnosticReport",
        "DocumentManifest",
        "DocumentReference",
        "EligibilityRequest",
        "EligibilityResponse",
        "Encounter",
        "EnrollmentRequest",
        "EnrollmentResponse",
        "EpisodeOfCare",
        "ExplanationOfBenefit",
        "FamilyMemberHistory",
        "Flag",
        "Goal",
        "Group",
        "HealthcareService",
        "ImagingObjectSelection",
        "ImagingStudy",
        "Immunization",
        "ImmunizationRecommendation",
        "ImplementationGuide",
        "List",
        "Location",
        "Media",
        "Medication",
        "MedicationAdministration",
        "MedicationDispense",
        "MedicationOrder",
        "MedicationStatement",
        "MessageHeader",
        "NamingSystem",
        "NutritionOrder",
        "Observation",
        "OperationDefinition",
        "OperationOutcome",
        "Order",
        "OrderResponse",
        "Organization",
        "Parameters",
        "Patient",
        "PaymentNotice",
        "PaymentReconciliation",
        "Person",
        "Practitioner",
        "Procedure",
        "ProcedureRequest",
        "ProcessRequest",
        "ProcessResponse",
        "Provenance",
        "Questionnaire",
        "QuestionnaireResponse",
        "ReferralRequest",
        "RelatedPerson",
        "RiskAssessment",
        "Schedule",
        "SearchParameter",
        "Slot",
        "Specimen",
        "StructureDefinition",
        "Subscription",
        "Substance",
        "SupplyDelivery",
        "SupplyRequest",
        "TestScript",
        "ValueSet",
        "VisionPrescription",
    }
)
