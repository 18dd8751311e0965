"""Validated, rate limited record writes.

Only fields declared by the entity schema ever reach the client, each in
its sanitized form.
"""

from typing import Any, Mapping, Optional

from governance.app.exceptions import ValidationError
from governance.app.rate_limit import ExecuteResult, RateGovernor, get_rate_limit_key
from governance.app.services.base import RecordClient
from governance.app.validation import (
    get_schema,
    partial_schema,
    validate_schema,
    validate_uuid,
)

CREATE = "data:create"
UPDATE = "data:update"
DELETE = "data:delete"


class RecordGuard:
    """Guards create / update / delete calls for one signed-in user."""

    def __init__(
        self,
        client: RecordClient,
        governor: RateGovernor,
        user_id: Optional[str] = None,
    ):
        self.client = client
        self.governor = governor
        self.user_id = user_id

    async def create(
        self,
        table: str,
        schema_name: str,
        payload: Mapping[str, Any],
    ) -> ExecuteResult:
        """Insert a record built from the sanitized payload.

        Schema defaults (e.g. an item's status) are included in the insert.
        """
        if not self.user_id:
            return ExecuteResult(error=ValidationError({"user_id": ["Not authenticated"]}))

        validation = validate_schema(payload, get_schema(schema_name))
        if not validation.is_valid:
            return ExecuteResult(error=ValidationError(validation.errors))

        document = {**validation.sanitized_data, "user_id": self.user_id}
        return await self.governor.execute(
            get_rate_limit_key(CREATE, self.user_id),
            CREATE,
            lambda: self.client.insert(table, document),
        )

    async def update(
        self,
        table: str,
        schema_name: str,
        record_id: str,
        payload: Mapping[str, Any],
    ) -> ExecuteResult:
        """Apply a partial update.

        Only the declared fields present in ``payload`` are validated and
        written, so schema defaults never overwrite stored values. A field
        that is required on create may be omitted but not blanked.
        """
        id_validation = validate_uuid(record_id)
        if not id_validation.is_valid:
            return ExecuteResult(error=ValidationError({"id": ["Invalid record ID"]}))

        schema = get_schema(schema_name)
        if isinstance(payload, Mapping):
            schema = partial_schema(schema, payload)

        validation = validate_schema(payload, schema)
        if not validation.is_valid:
            return ExecuteResult(error=ValidationError(validation.errors))

        document = validation.sanitized_data
        if not document:
            return ExecuteResult(error=ValidationError({"_root": ["No fields to update"]}))

        record_id = id_validation.sanitized_value
        return await self.governor.execute(
            get_rate_limit_key(UPDATE, record_id),
            UPDATE,
            lambda: self.client.update(table, record_id, document),
        )

    async def delete(self, table: str, record_id: str) -> ExecuteResult:
        id_validation = validate_uuid(record_id)
        if not id_validation.is_valid:
            return ExecuteResult(error=ValidationError({"id": ["Invalid record ID"]}))

        record_id = id_validation.sanitized_value
        return await self.governor.execute(
            get_rate_limit_key(DELETE, self.user_id or "unknown"),
            DELETE,
            lambda: self.client.delete(table, record_id),
        )
