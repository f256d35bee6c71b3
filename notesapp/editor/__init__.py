"""
Note Editor.

Client-side state for the front ends:

- scheduler.py: ScheduledTask, a cancel-and-reschedule timer on the event loop
- autosave.py: AutosaveController, debounced saving of the open note
- store.py: NotesStore, folders/notes/selection with optimistic updates
"""
