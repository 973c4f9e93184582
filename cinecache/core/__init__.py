"""
Couche domaine (core).

Contient la taxonomie d'erreurs, les ports (interfaces abstraites) et les objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (MediaKind, ReferenceTable, SubFetchSpec)
"""
