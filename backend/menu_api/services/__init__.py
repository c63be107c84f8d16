"""
Menu API — Services Layer
===========================

Service Inventory:
    - identifiers:   parse a dish identifier into NativeId / SequentialId / InvalidIdentifier
    - DishService:   list, fetch and create dishes; sequential-ID allocation
    - Authenticator (abstract) and HardcodedCredentialAuthenticator: admin login
"""
