# 📄 File: plantswap/modules/profiles/__init__.py
# 🧭 Purpose (Layman Explanation):
# The member profiles feature: who you are on the marketplace and your picture.
# 🧪 Purpose (Technical Summary):
# Profiles module package (domain / infrastructure / presentation layers).
# 🔗 Dependencies:
# plantswap.shared
# 🔄 Connected Modules / Calls From:
# plantswap.api.v1.router, plantswap.modules.exchanges (offer details)
