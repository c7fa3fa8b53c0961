"""Brand identity analyzer."""
