"""Resource translators.

Each module maps one resource type onto a Management API service:

    project                 -> ProjectService
    redirect_url            -> RedirectURLService
    password_config         -> PasswordConfigService
    rbac_policy             -> RBACPolicyService
    jwt_template            -> JWTTemplateService
    event_log_streaming     -> EventLogStreamingService
    trusted_token_profile   -> TrustedTokenProfileService
    email_template          -> EmailTemplateService
    default_email_template  -> EmailTemplateService (default per email type)
    public_token            -> PublicTokenService
    secret                  -> SecretService
    sdk_config              -> SDKConfigService (consumer and B2B types)
    country_code_allowlist  -> CountryCodeAllowlistService

``RESOURCES`` maps each ``type_name`` to its class.
"""
from .base import Resource
from .country_code_allowlist import CountryCodeAllowlistResource
from .default_email_template import DefaultEmailTemplateResource
from .email_template import EmailTemplateResource
from .event_log_streaming import EventLogStreamingResource
from .jwt_template import JWTTemplateResource
from .password_config import PasswordConfigResource
from .project import ProjectResource
from .public_token import PublicTokenResource
from .rbac_policy import RBACPolicyResource
from .redirect_url import RedirectURLResource
from .sdk_config import B2BSDKConfigResource, ConsumerSDKConfigResource
from .secret import SecretResource
from .trusted_token_profile import TrustedTokenProfileResource

RESOURCES = {
    cls.type_name: cls
    for cls in (
        ProjectResource,
        RedirectURLResource,
        PasswordConfigResource,
        RBACPolicyResource,
        JWTTemplateResource,
        EventLogStreamingResource,
        TrustedTokenProfileResource,
        EmailTemplateResource,
        DefaultEmailTemplateResource,
        PublicTokenResource,
        SecretResource,
        ConsumerSDKConfigResource,
        B2BSDKConfigResource,
        CountryCodeAllowlistResource,
    )
}

__all__ = [
    "RESOURCES",
    "Resource",
    "ProjectResource",
    "RedirectURLResource",
    "PasswordConfigResource",
    "RBACPolicyResource",
    "JWTTemplateResource",
    "EventLogStreamingResource",
    "TrustedTokenProfileResource",
    "EmailTemplateResource",
    "DefaultEmailTemplateResource",
    "PublicTokenResource",
    "SecretResource",
    "ConsumerSDKConfigResource",
    "B2BSDKConfigResource",
    "CountryCodeAllowlistResource",
]
