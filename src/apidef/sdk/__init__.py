"""apidef SDK - value types, parameter validation and tracing.

### Type Validation (`apidef.sdk.validator`)
Type registry, builtin types, parameter and schema validation.

### Telemetry (`apidef.sdk.telemetry`)
OpenTelemetry tracing wrapper.

### Core (`apidef.sdk.core`)
Package name and version.
"""
