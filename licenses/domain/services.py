"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity: signing terms into a license and
validating a license against a public key.
"""
import base64
import binascii
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature

from core.domain.exceptions import (
    DecodeError,
    KeyFormatError,
    LicenseExpiredError,
    LicenseNotYetValidError,
    MalformedTermsError,
    ProductMismatchError,
    SignatureMismatchError,
    SigningError,
    ValidationError,
)
from core.domain.value_objects import ValidationOutcome
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import (
    errors_total,
    license_validation_duration_seconds,
    license_validations_total,
    licenses_issued_total,
)
from licenses.domain.license import License, LicenseTerms, as_utc
from licenses.domain.signing_key import KeyMaterial, KeyPairStore
from licenses.domain.terms_codec import TermsCodec

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

OUTCOMES = {
    SignatureMismatchError: ValidationOutcome.SIGNATURE_MISMATCH,
    MalformedTermsError: ValidationOutcome.MALFORMED_TERMS,
    LicenseExpiredError: ValidationOutcome.EXPIRED,
    LicenseNotYetValidError: ValidationOutcome.NOT_YET_VALID,
    ProductMismatchError: ValidationOutcome.PRODUCT_MISMATCH,
}


def text_encode(data: bytes) -> str:
    """Encode binary payload as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def text_decode(text: str) -> bytes:
    """
    Decode standard base64 text, rejecting characters outside the alphabet.

    Raises:
        ValueError: If text is not valid base64
    """
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, AttributeError) as exc:
        raise ValueError("Not a base64 payload") from exc


def outcome_for(error: ValidationError) -> ValidationOutcome:
    """
    Map a validation error to its outcome label.

    Raises:
        KeyError: If the error type has no outcome label
    """
    return OUTCOMES[type(error)]


class LicenseSigner:
    """Domain service for issuing signed licenses."""

    @staticmethod
    def create_license(
        terms: LicenseTerms, private_key: Union[KeyMaterial, str]
    ) -> License:
        """
        Sign license terms with the issuer's private key.

        Args:
            terms: License terms to sign
            private_key: Private key material or its text document

        Returns:
            License carrying the encoded terms and their signature

        Raises:
            SigningError: If private_key is not a valid private key
        """
        try:
            material = KeyPairStore.coerce(private_key)
        except KeyFormatError as exc:
            errors_total.labels(error_type="SigningError", operation="sign").inc()
            raise SigningError(f"Invalid private key: {exc.message}") from exc
        if not material.is_private:
            errors_total.labels(error_type="SigningError", operation="sign").inc()
            raise SigningError("A public key cannot sign licenses")

        with tracer.start_as_current_span("license.sign") as span:
            span.set_attribute("license.product", terms.product_name)
            terms_bytes = TermsCodec.encode(terms)
            signature = material.signing_key().sign(terms_bytes)

        licenses_issued_total.labels(product=terms.product_name).inc()
        logger.info(
            f"Issued license for product={terms.product_name} user={terms.user_name} "
            f"valid {terms.start_date.isoformat()}..{terms.end_date.isoformat()}"
        )
        return License(
            terms_encoded=text_encode(terms_bytes),
            signature=text_encode(signature),
        )


class LicenseValidator:
    """Domain service for license validation."""

    @staticmethod
    def get_valid_terms(
        license: License, public_key: Union[KeyMaterial, str]
    ) -> LicenseTerms:
        """
        Verify the license signature and return the decoded terms.

        The signature is checked before the payload is interpreted.

        Args:
            license: License artifact
            public_key: Public key material or its text document

        Returns:
            Verified LicenseTerms

        Raises:
            KeyFormatError: If public_key cannot be parsed
            SignatureMismatchError: If the signature does not verify
            MalformedTermsError: If the signed payload cannot be decoded
        """
        verifying_key = KeyPairStore.coerce(public_key).verifying_key()

        try:
            terms_bytes = text_decode(license.terms_encoded)
            signature = text_decode(license.signature)
            verifying_key.verify(signature, terms_bytes)
        except (ValueError, InvalidSignature) as exc:
            raise SignatureMismatchError() from exc

        try:
            return TermsCodec.decode(terms_bytes)
        except DecodeError as exc:
            raise MalformedTermsError(f"License terms are malformed: {exc.message}") from exc

    @staticmethod
    def validate(
        license: License,
        public_key: Union[KeyMaterial, str],
        expected_product_name: str,
        now: Optional[datetime] = None,
    ) -> LicenseTerms:
        """
        Validate a license: signature, terms, validity window, product.

        Checks run in that order and stop at the first failure.

        Args:
            license: License artifact
            public_key: Public key material or its text document
            expected_product_name: Name of the product performing the check
            now: Current time (defaults to datetime.now(timezone.utc))

        Returns:
            The verified terms when the license permits execution

        Raises:
            KeyFormatError: If public_key cannot be parsed
            SignatureMismatchError: If the signature does not verify
            MalformedTermsError: If the signed payload cannot be decoded
            LicenseExpiredError: If now is after the end date
            LicenseNotYetValidError: If now is before the start date
            ProductMismatchError: If the license names another product
        """
        check_time = as_utc(now) if now is not None else datetime.now(timezone.utc)
        started = time.perf_counter()

        with tracer.start_as_current_span("license.validate") as span:
            span.set_attribute("license.expected_product", expected_product_name)
            try:
                terms = LicenseValidator.get_valid_terms(license, public_key)
                if check_time > terms.end_date:
                    raise LicenseExpiredError(terms.end_date)
                if check_time < terms.start_date:
                    raise LicenseNotYetValidError(terms.start_date)
                if terms.product_name != expected_product_name:
                    raise ProductMismatchError(terms.product_name)
            except ValidationError as exc:
                outcome = outcome_for(exc)
                span.set_status(Status(StatusCode.ERROR, exc.code))
                license_validations_total.labels(
                    product=expected_product_name, outcome=outcome.value
                ).inc()
                logger.info(f"License rejected: {exc.code} ({exc.message})")
                raise
            finally:
                license_validation_duration_seconds.observe(time.perf_counter() - started)

        license_validations_total.labels(
            product=expected_product_name, outcome=ValidationOutcome.VALID.value
        ).inc()
        logger.debug(f"License valid for product={terms.product_name} user={terms.user_name}")
        return terms
