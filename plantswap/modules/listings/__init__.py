# 📄 File: plantswap/modules/listings/__init__.py
# 🧭 Purpose (Layman Explanation):
# The plant listings feature: people put plants up for exchange and browse what others offer.
# 🧪 Purpose (Technical Summary):
# Listings module package (domain / infrastructure / presentation layers).
# 🔗 Dependencies:
# plantswap.shared
# 🔄 Connected Modules / Calls From:
# plantswap.api.v1.router, plantswap.modules.exchanges

"""
Listings Module

- Plant listing CRUD scoped to the owning user
- Browse with search / location filtering
- Plant photos in the plants bucket
"""
