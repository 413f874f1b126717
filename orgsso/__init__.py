"""Organization single sign-on: OIDC login and user provisioning."""
