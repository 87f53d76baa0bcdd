"""
Freemind registry subsystem.

Components:
- task_models.py: data structures (TaskRecord, Preparation)
- registry_xml.py: registry document decoding
- task_digest.py: effective times, alert window and "due today" queries
- freemind_client.py: async HTTP client for the registry server
"""
