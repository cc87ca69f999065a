# 📄 File: plantswap/modules/notifications/__init__.py
# 🧭 Purpose (Layman Explanation):
# The inbox feature: messages telling members how their exchanges are going.
# 🧪 Purpose (Technical Summary):
# Notifications module package: feed operations and generation from exchange events.
# 🔗 Dependencies:
# plantswap.shared, plantswap.modules.exchanges (events and statuses)
# 🔄 Connected Modules / Calls From:
# plantswap.api.v1.router, plantswap.main (event handler registration)
