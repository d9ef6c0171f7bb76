"""Tests for input validation."""

import pytest

from growyourlist import EmailBody, EmailSend, SendOptions, ValidationError
from growyourlist.validation import (
    validate_send_single_email,
    validate_status_email,
    validate_subscriber,
    validate_tag,
    validate_unsubscribe,
    validate_untag,
)

INVALID_EMAILS = ["", None, "not-an-email", "missing-at.example.com", "a@", "@b.com", 42]


class TestEmailChecks:
    @pytest.mark.parametrize("email", INVALID_EMAILS)
    @pytest.mark.parametrize(
        "validator", [validate_subscriber, validate_unsubscribe, validate_tag, validate_untag]
    )
    def test_rejects_invalid_email(self, validator, email):
        with pytest.raises(ValidationError, match="email"):
            validator({"email": email, "tag": "valid-tag"})

    def test_rejects_missing_email(self):
        with pytest.raises(ValidationError):
            validate_unsubscribe({})

    def test_rejects_non_mapping(self):
        with pytest.raises(ValidationError, match="mapping"):
            validate_unsubscribe("person@example.com")

    def test_accepts_valid_email(self):
        validate_unsubscribe({"email": "person@example.com"})

    @pytest.mark.parametrize("email", ["dev@shop.test", "me@host.local"])
    def test_accepts_special_use_domains(self, email):
        validate_unsubscribe({"email": email})

    def test_status_email_length_limit(self):
        validate_status_email("person@example.com")
        with pytest.raises(ValidationError):
            validate_status_email("a" * 251 + "@b.com")
        with pytest.raises(ValidationError):
            validate_status_email("")


class TestValidateSubscriber:
    def test_tags_must_be_list(self):
        with pytest.raises(ValidationError, match="tags"):
            validate_subscriber({"email": "person@example.com", "tags": "one"})

    def test_tags_must_be_strings(self):
        with pytest.raises(ValidationError, match="strings"):
            validate_subscriber({"email": "person@example.com", "tags": ["one", 2]})

    def test_accepts_tags_and_none(self):
        validate_subscriber({"email": "person@example.com", "tags": ["one", "two"]})
        validate_subscriber({"email": "person@example.com", "tags": None})


class TestValidateTag:
    def test_requires_tag(self):
        with pytest.raises(ValidationError, match="tag"):
            validate_tag({"email": "person@example.com"})
        with pytest.raises(ValidationError, match="tag"):
            validate_tag({"email": "person@example.com", "tag": ""})

    def test_no_charset_check(self):
        validate_tag({"email": "person@example.com", "tag": "has spaces & @"})


class TestValidateUntag:
    def test_accepts_alnum_dash_underscore(self):
        validate_untag({"email": "person@example.com", "tag": "abc-12_3"})

    def test_accepts_max_length(self):
        validate_untag({"email": "person@example.com", "tag": "a" * 64})

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError, match="tag"):
            validate_untag({"email": "person@example.com", "tag": "a" * 65})

    @pytest.mark.parametrize("tag", ["bad@tag", "with space", "", None, "---", "ümlaut"])
    def test_rejects_bad_tags(self, tag):
        with pytest.raises(ValidationError, match="tag"):
            validate_untag({"email": "person@example.com", "tag": tag})


class TestValidateSendSingleEmail:
    def test_template_email(self):
        validate_send_single_email({"toEmailAddress": "a@b.com", "templateId": "T1"})

    def test_inline_email(self):
        validate_send_single_email(
            {"toEmailAddress": "a@b.com", "subject": "S", "body": {"text": "t"}}
        )

    def test_inline_email_struct(self):
        validate_send_single_email(
            EmailSend(
                to_email_address="Test <a@b.com>",
                subject="S",
                body=EmailBody(html="<b>t</b>"),
            ),
            SendOptions(wait_in_seconds=0, tag_reason=["a", "b"]),
        )

    def test_struct_with_mapping_body(self):
        validate_send_single_email(
            EmailSend(to_email_address="a@b.com", subject="S", body={"text": "t"})
        )
        with pytest.raises(ValidationError, match="html"):
            validate_send_single_email(
                EmailSend(to_email_address="a@b.com", subject="S", body={"other": "x"})
            )

    def test_rejects_unknown_body_key(self):
        with pytest.raises(ValidationError, match="html"):
            validate_send_single_email(
                {"toEmailAddress": "a@b.com", "subject": "S", "body": {"other": "x"}}
            )

    def test_rejects_non_string_body_value(self):
        with pytest.raises(ValidationError, match="text"):
            validate_send_single_email(
                {"toEmailAddress": "a@b.com", "subject": "S", "body": {"text": 5}}
            )

    def test_requires_recipient(self):
        with pytest.raises(ValidationError, match="toEmailAddress"):
            validate_send_single_email({"templateId": "T1"})
        with pytest.raises(ValidationError, match="toEmailAddress"):
            validate_send_single_email({"toEmailAddress": "", "templateId": "T1"})

    def test_requires_subject_without_template(self):
        with pytest.raises(ValidationError, match="subject"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "body": {"text": "t"}})

    def test_requires_body_without_template(self):
        with pytest.raises(ValidationError, match="body"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "subject": "S"})
        with pytest.raises(ValidationError, match="body"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "subject": "S", "body": {}})

    def test_blank_template_id_means_inline(self):
        with pytest.raises(ValidationError, match="subject"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "templateId": ""})

    def test_rejects_template_with_inline_content(self):
        with pytest.raises(ValidationError, match="templateId"):
            validate_send_single_email(
                {"toEmailAddress": "a@b.com", "templateId": "T1", "subject": "S"}
            )

    def test_rejects_non_string_template(self):
        with pytest.raises(ValidationError, match="templateId"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "templateId": 7})

    def test_rejects_non_mapping_opts(self):
        with pytest.raises(ValidationError, match="opts"):
            validate_send_single_email({"toEmailAddress": "a@b.com", "templateId": "T1"}, "x")

    @pytest.mark.parametrize(
        "opts, field",
        [
            ({"fromEmailAddress": 1}, "fromEmailAddress"),
            ({"waitInSeconds": -1}, "waitInSeconds"),
            ({"waitInSeconds": 1.5}, "waitInSeconds"),
            ({"waitInSeconds": True}, "waitInSeconds"),
            ({"tagOnClick": ["a"]}, "tagOnClick"),
            ({"tagReason": 3}, "tagReason"),
            ({"tagReason": ["ok", 3]}, "tagReason"),
            ({"autoSaveUnknownSubscriber": "yes"}, "autoSaveUnknownSubscriber"),
        ],
    )
    def test_rejects_bad_options(self, opts, field):
        with pytest.raises(ValidationError, match=field):
            validate_send_single_email({"toEmailAddress": "a@b.com", "templateId": "T1"}, opts)

    def test_accepts_all_options(self):
        validate_send_single_email(
            {"toEmailAddress": "a@b.com", "templateId": "T1"},
            {
                "fromEmailAddress": "Me <me@example.com>",
                "waitInSeconds": 60,
                "tagOnClick": "clicked",
                "tagReason": "list-default",
                "autoSaveUnknownSubscriber": False,
            },
        )
