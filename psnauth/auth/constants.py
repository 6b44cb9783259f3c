"""PSN Remote Play OAuth constants."""

# Fixed parameters of the Remote Play OAuth client.
CLIENT_ID = "ba495a24-818c-472b-b12d-ff231c1b5745"
CLIENT_SECRET = "mvaiZkRsAsI1IBkY"
AUTHORIZE_URL = "https://auth.api.sonyentertainmentnetwork.com/2.0/oauth/authorize"
TOKEN_URL = "https://auth.api.sonyentertainmentnetwork.com/2.0/oauth/token"
REDIRECT_URI = "https://remoteplay.dl.playstation.net/remoteplay/redirect"
SCOPE = (
    "psn:clientapp referenceDataService:countryConfig.read "
    "pushNotification:webSocket.desktop.connect "
    "sessionManager:remotePlaySession.system.update"
)

DUID_PREFIX = "0000000700410080"
DUID_RANDOM_BYTES = 16

# Display parameters appended after the duid on the login page.
LOGIN_DISPLAY_PARAMS = {
    "request_locale": "en_US",
    "ui": "pr",
    "service_logo": "ps",
    "layout_type": "popup",
    "smcid": "remoteplay",
    "prompt": "always",
    "PlatformPrivacyWs1": "minimal",
}

CREDENTIALS_FILENAME = "token.txt"
TOKEN_FILENAME = "token.txt"
REQUEST_TIMEOUT_SEC = 30.0
ACCOUNT_ID_BYTES = 8
