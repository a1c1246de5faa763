"""
API route modules for the balloon studio.

This package contains subrouters for:
- Auth and users: login, register, refresh, logout, current user, user admin
- Designs: canvas designs, material analysis, inventory checks, shortage orders
- Inventory and accessories: stock lines, availability checks, restocks
- Production, orders and payments
- Clients: intake form and CRM sync
- Reports: CSV / XLSX / PDF exports

Routers are included from src.api.main (under the /api prefix).
"""
