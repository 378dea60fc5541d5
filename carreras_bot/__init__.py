"""Monitor de inscripciones de carreraspanama.com"""
