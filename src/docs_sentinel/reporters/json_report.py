import json

from ..models import AuditResult, CheckResult


def format_audit_json(result: AuditResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def format_check_json(result: CheckResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def load_audit_json(text: str) -> AuditResult:
    """Rebuild an AuditResult from format_audit_json output."""
    return AuditResult.from_dict(json.loads(text))
