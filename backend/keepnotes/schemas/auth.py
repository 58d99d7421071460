"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from keepnotes.security.passwords import DEFAULT_MAX_LENGTH

PASSWORD_MIN_LENGTH = 6


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True,
        validate=validate.Length(min=PASSWORD_MIN_LENGTH, max=DEFAULT_MAX_LENGTH),
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    Only presence is checked; a malformed email or over-long password simply
    fails authentication.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1))
    password = fields.String(required=True, validate=validate.Length(min=1))


class UserSchema(Schema):
    """Public user representation."""

    id = fields.Integer(required=True)
    email = fields.String(required=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class AuthResponseSchema(Schema):
    """Register/login response: access token, refresh token and user."""

    token = fields.String(attribute="access_token", required=True)
    refresh_token = fields.String(required=True)
    user = fields.Nested(UserSchema)


class TokenPairSchema(Schema):
    """Refresh response: the new access token and rotated refresh token."""

    token = fields.String(attribute="access_token", required=True)
    refresh_token = fields.String(required=True)
