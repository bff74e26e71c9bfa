"""Schemas for the lotto frequency + cached draw API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class LottoQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Accepts 1/0, true/false, yes/no, on/off.
    include_bonus = fields.Boolean(data_key="includeBonus", required=False, load_default=False)


class DrawListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    limit = fields.Integer(required=False, load_default=20, validate=validate.Range(min=1, max=500))


class DrawSchema(Schema):
    draw_no = fields.Integer(data_key="drawNo", required=True)
    draw_date = fields.String(data_key="drawDate", required=True)
    numbers = fields.List(fields.Integer(), required=True)
    bonus = fields.Integer(required=True)


class NumberCountSchema(Schema):
    num = fields.Integer(required=True)
    count = fields.Integer(required=True)


class LottoFrequencySchema(Schema):
    """Served view of the cache; field names follow the public camelCase API."""

    source = fields.String(required=True)
    updated_at = fields.DateTime(data_key="updatedAt", format="iso", allow_none=True)
    latest_draw = fields.Integer(data_key="latestDraw", required=True)
    latest_date = fields.String(data_key="latestDate", allow_none=True)
    total_draws = fields.Integer(data_key="totalDraws", required=True)
    include_bonus = fields.Boolean(data_key="includeBonus", required=True)

    counts = fields.List(fields.Nested(NumberCountSchema), required=True)
    ranking = fields.List(fields.Nested(NumberCountSchema), required=True)
    top6 = fields.List(fields.Integer(), required=True)
    next6 = fields.List(fields.Integer(), required=True)
    top18 = fields.List(fields.Integer(), required=True)
    has_data = fields.Boolean(data_key="hasData", required=True)

    missing_draws = fields.List(fields.Integer(), data_key="missingDraws", required=True)
    api_blocked_until = fields.DateTime(data_key="apiBlockedUntil", format="iso", allow_none=True)


class CacheStatusSchema(Schema):
    state = fields.String(required=True)
    latest = fields.Integer(required=True)
    total_draws = fields.Integer(data_key="totalDraws", required=True)
    missing = fields.Integer(required=True)
    updated_at = fields.DateTime(data_key="updatedAt", format="iso", allow_none=True)
    blocked_until = fields.DateTime(data_key="blockedUntil", format="iso", allow_none=True)
