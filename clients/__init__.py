# Infrastructure clients
from clients.valkey_client import ValkeyClient
