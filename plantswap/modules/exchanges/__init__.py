# 📄 File: plantswap/modules/exchanges/__init__.py
# 🧭 Purpose (Layman Explanation):
# The plant swap feature: proposing, negotiating and completing exchanges between two people.
# 🧪 Purpose (Technical Summary):
# Exchanges module package (domain / infrastructure / presentation layers) holding the
# negotiation state machine.
# 🔗 Dependencies:
# plantswap.shared, plantswap.modules.listings, plantswap.modules.profiles
# 🔄 Connected Modules / Calls From:
# plantswap.api.v1.router, plantswap.modules.notifications (event subscriber)
